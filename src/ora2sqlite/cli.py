"""
Command line interface for migrating an oracle schema to sqlite
"""
# -----------------------------------------------

import argparse
import json
import sqlite3
import sys

import oracledb

from ora2sqlite import o2s
from ora2sqlite.mgr import MANAGER

# -----------------------------------------------

DESCRIPTION = 'Copies an oracle schema, tables, views and data, into a sqlite database file.'

EPILOG = '\n'.join([
    'LONGs and BFILEs cannot be retrieved, so they are always set to null.',
    '',
    'Example: ora2sqlite -s server:1521/service -u data -p pass -d data.db -f "table_name in (\'TEST\')" -r 100'
])

# ---
#  command line destination to parameter name

ARGUMENT_PARAMETERS = {
    'source': o2s.ORACLE_DSN,
    'username': o2s.ORACLE_USER,
    'password': o2s.ORACLE_PASSWORD,
    'destination': o2s.SQLITE_FILE,
    'views': o2s.VIEWS,
    'view_filter': o2s.VIEW_FILTER,
    'blobs': o2s.BLOBS,
    'clobs': o2s.CLOBS,
    'xml': o2s.XML,
    'table_filter': o2s.TABLE_FILTER,
    'rows': o2s.MAX_ROWS,
    'indices': o2s.INDEXES,
    'fks': o2s.FOREIGN_KEYS,
    'pks': o2s.PRIMARY_KEYS,
    'uks': o2s.UNIQUE_KEYS,
    'log_file': o2s.LOG_FILE,
    'encoding': o2s.ENCODING,
    'instant_client': o2s.ORACLE_INSTANT_CLIENT
}

# -----------------------------------------------


def build_parser():
    """
    Builds the argument parser. Switches default to None so that unset
    switches do not override the parameter file.
    """

    parser = argparse.ArgumentParser(
        prog='ora2sqlite',
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument('-s', '--source', help='Oracle database')
    parser.add_argument('-u', '--username', help='Oracle schema')
    parser.add_argument('-p', '--password', help='Oracle password')
    parser.add_argument('-d', '--destination', help='SQLite filename (defaults to the oracle schema name)')
    parser.add_argument('-v', '--views', action='store_true', default=None, help='Copy views')
    parser.add_argument('-V', '--view-filter', help='View filter')
    parser.add_argument('-b', '--blobs', action='store_true', default=None, help='Copy blobs (RAW is treated as BLOB)')
    parser.add_argument('-c', '--clobs', action='store_true', default=None, help='Copy clobs')
    parser.add_argument('-x', '--xml', action='store_true', default=None,
                        help='Copy XML (XMLTYPE is treated as text)')
    parser.add_argument('-f', '--table-filter', help='Filter tables by name')
    parser.add_argument('-r', '--rows', type=int, help='Max number of rows')
    parser.add_argument('-I', '--indices', action='store_true', default=None, help='Copy indices')
    parser.add_argument('-F', '--fks', action='store_true', default=None, help='Copy foreign keys')
    parser.add_argument('-P', '--pks', action='store_true', default=None, help='Copy primary keys')
    parser.add_argument('-U', '--uks', action='store_true', default=None, help='Copy unique keys')
    parser.add_argument('-A', dest='all_constraints', action='store_true',
                        help='Copy indices, fks, pks and uks (same as -PFIU)')
    parser.add_argument('-C', '--config', help='JSON parameter file')
    parser.add_argument('-E', '--encoding', help='Parameter file encoding (defaults to utf-8-sig)')
    parser.add_argument('-L', '--log-file', help='Log file')
    parser.add_argument('-q', '--quiet', action='store_true', help='Do not echo progress to the console')
    parser.add_argument('--instant-client', help='Oracle Instant Client directory, enables thick mode')

    return parser


# ---


def _die(parser, message):
    """ Prints the usage banner and exits with status 2 """

    parser.print_help(sys.stderr)
    parser.exit(2, f'\n{parser.prog}: error: {message}\n')


# -----------------------------------------------


def read_json_file(filename: str, encoding: str = o2s.DEFAULT_PARAMETERS[o2s.ENCODING]):
    """
    Reads a json file to a dict

    :param filename: the filename including path
    :param encoding: the file encoding
    :return: the json file as dict
    """

    with open(filename, encoding=encoding) as jf:
        parameters = json.load(jf)
    return parameters


# -----------------------------------------------


def get_parameters(args):
    """
    Merges the parameter file and the command line arguments, the command line wins

    :param args: the parsed arguments
    :return: dict of parameters
    """

    parameters = {}

    if args.config:
        parameters.update(read_json_file(args.config, args.encoding or o2s.DEFAULT_PARAMETERS[o2s.ENCODING]))

    for dest, name in ARGUMENT_PARAMETERS.items():
        value = getattr(args, dest)
        if value is not None:
            parameters[name] = value

    if args.all_constraints:
        for name in [o2s.INDEXES, o2s.FOREIGN_KEYS, o2s.PRIMARY_KEYS, o2s.UNIQUE_KEYS]:
            parameters[name] = True

    parameters[o2s.CONSOLE] = not args.quiet

    return parameters


# -----------------------------------------------


def main(argv=None):
    """
    Runs the migration from the command line

    :param argv: the arguments, defaults to sys.argv
    :return: the exit status
    """

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        parameters = get_parameters(args)
    except (OSError, LookupError, ValueError) as e:
        _die(parser, f'Cannot read parameter file: {e}')

    try:
        x = MANAGER(**parameters)
    except OSError as e:
        _die(parser, f'Cannot open log file: {e}')

    try:
        x.validate_parameters()
        x.get_oracle_connection()
    except ValueError as e:
        x.close()
        _die(parser, str(e))
    except oracledb.Error as e:
        x.close()
        _die(parser, f'Cannot connect to oracle: {e}')

    try:
        x.do_etl()
    except (oracledb.Error, sqlite3.Error) as e:
        print(f'{parser.prog}: error: {e}', file=sys.stderr)
        return 1

    return 0


# -----------------------------------------------
# End.
