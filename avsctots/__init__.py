import importlib

mod = "avsctots"
class LazyLoader:
    """
    Lazy loader for the avsctots functions to speed up startup time.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item in self._mappings:
            module_name, func_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, func_name)
        else:
            return self._load_module(f"{mod}.{item}")

# Define the functions and their corresponding module paths
_mappings = {
    "AvroToTypeScript": (f"{mod}.avrotots", "AvroToTypeScript"),
    "convert_avro_to_typescript": (f"{mod}.avrotots", "convert_avro_to_typescript"),
    "convert_avro_schema_to_typescript": (f"{mod}.avrotots", "convert_avro_schema_to_typescript"),
    "convert_avro_files_to_typescript": (f"{mod}.avrotots", "convert_avro_files_to_typescript"),
    "Options": (f"{mod}.model", "Options"),
    "EnumVariant": (f"{mod}.model", "EnumVariant"),
    "FqnResolver": (f"{mod}.fqnresolver", "FqnResolver"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
