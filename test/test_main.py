import argparse
import os
import tempfile
import unittest
from unittest.mock import patch

from avsctots.avsctots import main


def get_avsc():
    """Provides the Avro input file path."""
    return os.path.join(os.path.dirname(__file__), 'avsc', 'address.avsc')


def a2ts_args(**overrides):
    values = dict(command='a2ts', file=[get_avsc()], out=None, convert_enum_to_type=False, remove_namespace=False,
                  custom_mode=False, enums='ENUM', continue_on_error=False, verbose=False)
    values.update(overrides)
    return argparse.Namespace(**values)


class TestMain(unittest.TestCase):

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command=None))
    def test_main_no_command(self, mock_parse_args):
        """Test main function with no command."""
        with patch('argparse.ArgumentParser.print_help') as mock_help:
            main()
        mock_help.assert_called_once()

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command=None, version=True))
    def test_main_version(self, mock_parse_args):
        """Test main function with --version."""
        with patch('builtins.print') as mock_print:
            main()
        self.assertTrue(mock_print.call_args[0][0].startswith('avsctots '))

    def test_main_a2ts_command(self):
        """Test main function with a2ts command writing to a file."""
        out = os.path.join(tempfile.gettempdir(), 'avsctots', 'output.ts')
        with patch('argparse.ArgumentParser.parse_args', return_value=a2ts_args(out=out, custom_mode=True)):
            main()
        assert os.path.exists(out)
        with open(out, 'r', encoding='utf-8') as f:
            content = f.read()
        self.assertIn('// Generated from address.avsc', content)
        self.assertIn('export class Address implements IAddress {', content)

    def test_main_a2ts_stdout(self):
        """Test main function with a2ts command writing to standard output."""
        with patch('argparse.ArgumentParser.parse_args', return_value=a2ts_args(remove_namespace=True, enums='STRING')):
            with patch('sys.stdout.write') as mock_write:
                main()
        written = ''.join(call[0][0] for call in mock_write.call_args_list)
        self.assertIn("export type AddressKind = 'HOME' | 'WORK' | 'OTHER'", written)

    def test_main_missing_file(self):
        """Test main function with an input path that does not exist."""
        missing = os.path.join(tempfile.gettempdir(), 'avsctots-missing.avsc')
        with patch('argparse.ArgumentParser.parse_args', return_value=a2ts_args(file=[missing])):
            with patch('builtins.print') as mock_print:
                with self.assertRaises(SystemExit) as ctx:
                    main()
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn('doesn\'t exist', mock_print.call_args[0][1])

    def test_main_without_file(self):
        """Test main function with a2ts command and no input."""
        with patch('argparse.ArgumentParser.parse_args', return_value=a2ts_args(file=None)):
            with patch('builtins.print'):
                with self.assertRaises(SystemExit):
                    main()


if __name__ == '__main__':
    unittest.main()
