import unittest

from avsctots.fqnresolver import FqnResolver
from avsctots.model import GenerationContext, Options
from avsctots.serialization import (Branch, generate_deserialize, generate_deserialize_value, generate_serialize,
                                    generate_serialize_condition, generate_serialize_value, render_dispatch)

X = {"type": "record", "name": "X", "fields": []}
Y = {"type": "record", "name": "Y", "fields": []}
GEO = {"type": "record", "name": "Geo", "namespace": "com.example", "fields": []}
KIND = {"type": "enum", "name": "Kind", "namespace": "com.example", "symbols": ["HOME", "WORK"]}


def make_context(*types, **options):
    resolver = FqnResolver()
    mapping = {}
    for t in types:
        mapping[resolver.add(t.get('namespace'), t['name'])] = t
    return GenerationContext(options=Options(custom_mode=True, **options), fqn_resolver=resolver, name_to_type_mapping=mapping)


def assert_in_order(test, text, *parts):
    positions = [text.index(part) for part in parts]
    test.assertEqual(positions, sorted(positions), f"{parts} not in order in:\n{text}")


class TestDispatch(unittest.TestCase):

    def test_render_dispatch(self):
        text = render_dispatch([Branch('a === 1', 'return 1'), Branch('a === 2', 'return 2')], 'Nope')
        self.assertEqual(text, "(() => {\n"
                               "  if (a === 1) {\n"
                               "    return 1\n"
                               "  } else if (a === 2) {\n"
                               "    return 2\n"
                               "  }\n"
                               "  throw new TypeError('Nope')\n"
                               "})()")


class TestDeserialize(unittest.TestCase):

    def test_pass_through(self):
        context = make_context(KIND)
        self.assertEqual(generate_deserialize_value('string', context, 'input.a'), 'input.a')
        self.assertEqual(generate_deserialize_value('com.example.Kind', context, 'input.a'), 'input.a')
        self.assertEqual(generate_deserialize_value(['int'], context, 'input.a'), 'input.a')

    def test_record_delegates(self):
        context = make_context(GEO)
        self.assertEqual(generate_deserialize_value('com.example.Geo', context, 'input.g'), 'com.example.Geo.deserialize(input.g)')
        context = make_context(GEO, remove_namespace=True)
        self.assertEqual(generate_deserialize_value(GEO, context, 'input.g'), 'Geo.deserialize(input.g)')

    def test_union_of_records(self):
        """ null first, then X's FQN, then Y's FQN, then a runtime error """
        record = {"type": "record", "name": "R", "fields": [{"name": "u", "type": ["null", X, Y]}]}
        text = generate_deserialize(record, make_context(record, X, Y))
        assert_in_order(self, text,
                        'if (input.u == null)',
                        'else if (input.u[X.FQN] !== undefined)',
                        'return X.deserialize(input.u[X.FQN])',
                        'else if (input.u[Y.FQN] !== undefined)',
                        'return Y.deserialize(input.u[Y.FQN])',
                        "throw new TypeError('Unresolvable type')")

    def test_union_keys(self):
        context = make_context(GEO, KIND)
        union = ['string', 'com.example.Kind', {"type": "array", "items": "int"}, {"type": "map", "values": "int"}, 'null']
        text = generate_deserialize_value(union, context, 'v')
        assert_in_order(self, text,
                        'if (v === null)',
                        "v['string'] !== undefined",
                        "v['com.example.Kind'] !== undefined",
                        "v['array'] !== undefined",
                        "return v['array'].map((e: any) => e)",
                        "v['map'] !== undefined")

    def test_array_of_unions_uses_block(self):
        context = make_context(GEO)
        text = generate_deserialize_value({"type": "array", "items": ["null", "com.example.Geo", "string"]}, context, 'input.p')
        self.assertTrue(text.startswith('input.p.map((e: any) => {\n  return (() => {'))
        self.assertIn('if (e === null)', text)
        self.assertIn('return com.example.Geo.deserialize(e[com.example.Geo.FQN])', text)
        self.assertIn("return e['string']", text)

    def test_map_iterates_keys(self):
        context = make_context()
        text = generate_deserialize_value({"type": "map", "values": "int"}, context, 'input.m')
        self.assertEqual(text, "(() => {\n"
                               "  const keys = Object.keys(input.m)\n"
                               "  const output: { [index:string]: number } = {}\n"
                               "  for (const mapKey of keys) {\n"
                               "    const mapValue = input.m[mapKey]\n"
                               "    output[mapKey] = mapValue\n"
                               "  }\n"
                               "  return output\n"
                               "})()")

    def test_nested_maps_do_not_shadow(self):
        context = make_context(GEO)
        text = generate_deserialize_value({"type": "map", "values": {"type": "map", "values": "com.example.Geo"}}, context, 'input.m')
        self.assertIn('const keys1 = Object.keys(mapValue)', text)
        self.assertIn('const mapValue1 = mapValue[mapKey1]', text)
        self.assertIn('output1[mapKey1] = com.example.Geo.deserialize(mapValue1)', text)

    def test_required_field_union_keeps_null(self):
        record = {"type": "record", "name": "R", "fields": [{"name": "s", "type": ["string", "null"]}]}
        text = generate_deserialize(record, make_context(record))
        self.assertIn('if (input.s === null) {\n', text)
        self.assertIn('return null', text)


class TestSerialize(unittest.TestCase):

    def test_conditions(self):
        context = make_context(GEO, KIND)
        self.assertEqual(generate_serialize_condition('string', context, 'v'), "typeof v === 'string'")
        self.assertEqual(generate_serialize_condition('boolean', context, 'v'), "typeof v === 'boolean'")
        self.assertEqual(generate_serialize_condition('long', context, 'v'), 'Number.isInteger(v)')
        self.assertEqual(generate_serialize_condition('double', context, 'v'), "typeof v === 'number'")
        self.assertEqual(generate_serialize_condition('bytes', context, 'v'), 'Buffer.isBuffer(v)')
        self.assertEqual(generate_serialize_condition({"type": "array", "items": "int"}, context, 'v'), 'Array.isArray(v)')
        self.assertEqual(generate_serialize_condition('Geo', context, 'v'), 'v instanceof com.example.Geo')
        self.assertEqual(generate_serialize_condition('Kind', context, 'v'),
                         "typeof v === 'string' && ['HOME', 'WORK'].indexOf(v) >= 0")
        self.assertIn('Object.getPrototypeOf(v) === Object.prototype',
                      generate_serialize_condition({"type": "map", "values": "int"}, context, 'v'))

    def test_union_wraps_in_tagged_object(self):
        context = make_context(GEO, KIND)
        text = generate_serialize_value(['null', 'com.example.Geo', 'com.example.Kind', 'int', 'double'], context, 'input.u', optional=True)
        assert_in_order(self, text,
                        'if (input.u == null)',
                        'return null',
                        'input.u instanceof com.example.Geo',
                        'return { [com.example.Geo.FQN]: com.example.Geo.serialize(input.u) }',
                        "return { 'com.example.Kind': input.u }",
                        "return { 'int': input.u }",
                        "return { 'double': input.u }",
                        "throw new TypeError('Unserializable type!')")

    def test_serialize_method(self):
        record = {"type": "record", "name": "R", "fields": [
            {"name": "a", "type": "string"},
            {"name": "g", "type": GEO},
            {"name": "l", "type": {"type": "array", "items": "com.example.Geo"}},
        ]}
        text = generate_serialize(record, make_context(record, GEO))
        self.assertEqual(text, "public static serialize(input: R): object {\n"
                               "  return {\n"
                               "    a: input.a,\n"
                               "    g: com.example.Geo.serialize(input.g),\n"
                               "    l: input.l.map((e: any) => com.example.Geo.serialize(e)),\n"
                               "  }\n"
                               "}")

    def test_serialize_map_of_unions(self):
        context = make_context()
        text = generate_serialize_value({"type": "map", "values": ["null", "string"]}, context, 'input.m')
        self.assertIn('const output: any = {}', text)
        self.assertIn('if (mapValue === null)', text)
        self.assertIn("return { 'string': mapValue }", text)


if __name__ == '__main__':
    unittest.main()
