"""

Command line utility to convert Avro schemas to TypeScript.

"""


import argparse
import json
import logging
import os
import sys

from avsctots import _version

ARG_TYPES = {
    'str': str,
    'int': int,
}


def load_commands():
    """Load the commands from the commands.json file."""
    commands_path = os.path.join(os.path.dirname(__file__), 'commands.json')
    with open(commands_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def create_subparsers(subparsers, commands):
    """Create subparsers for the commands."""
    for command in commands:
        cmd_parser = subparsers.add_parser(command['command'], help=command['description'])
        cmd_parser.add_argument('--verbose', '-v', action='store_true', help='Print debug logging.')
        for arg in command['args']:
            names = [arg['name']] + ([arg['alias']] if 'alias' in arg else [])
            kwargs = {
                'help': arg['help'],
            }
            if 'nargs' in arg:
                kwargs['nargs'] = arg['nargs']
            if 'choices' in arg:
                kwargs['choices'] = arg['choices']
            if 'default' in arg:
                kwargs['default'] = arg['default']
            if arg['type'] == 'bool':
                kwargs['action'] = 'store_true'
            else:
                kwargs['type'] = ARG_TYPES[arg['type']]
            carg = cmd_parser.add_argument(*names, **kwargs)
            carg.required = arg.get('required', True)


def dynamic_import(module, func):
    """Dynamically import a module and function."""
    mod = __import__(module, fromlist=[func])
    return getattr(mod, func)


def main():
    """Main function for the command line utility."""
    commands = load_commands()
    parser = argparse.ArgumentParser(description='Convert Avro schemas to TypeScript declarations and classes.')
    parser.add_argument('--version', action='store_true', help='Print the version of avsctots.')

    subparsers = parser.add_subparsers(dest='command')
    create_subparsers(subparsers, commands)

    args = parser.parse_args()

    if getattr(args, 'version', False):
        print(f'avsctots {_version.version}')
        return

    if args.command is None:
        parser.print_help()
        return

    if getattr(args, 'verbose', False):
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    try:
        command = next((cmd for cmd in commands if cmd['command'] == args.command), None)
        if not command:
            print(f"Error: Command {args.command} not found.")
            sys.exit(1)

        input_file_path = getattr(args, 'file', None)
        output_file_path = getattr(args, 'out', None)

        module_name, func_name = command['function']['name'].rsplit('.', 1)
        func = dynamic_import(module_name, func_name)
        func_args = {}
        for arg, val in command['function']['args'].items():
            if val == 'input_file_path':
                func_args[arg] = input_file_path
            elif val == 'output_file_path':
                func_args[arg] = output_file_path
            elif val.startswith('args.'):
                if hasattr(args, val[5:]):
                    func_args[arg] = getattr(args, val[5:])
            else:
                func_args[arg] = val
        if output_file_path:
            print(f'Executing {command["description"]} with input {input_file_path} and output {output_file_path}')
        func(**func_args)

    except Exception as e:  # pylint: disable=broad-except
        print("Error: ", str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
