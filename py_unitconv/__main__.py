import argparse
import logging
import sys
from importlib import metadata
from typing import List, Optional

from py_unitconv import basicConfig, ConfigurationError, ConversionError, logger, set_log_level

version = metadata.metadata("py_unitconv")['Version']


def add_format_arguments(parser):
    fmt = parser.add_argument_group('Format', 'Result formatting')
    fmt.add_argument("-p", "--precision", action="store", type=int, default=None,
                     help="Decimal places of the result")
    fmt.add_argument("-e", "--exact", action="store_true", default=None,
                     help="Print integral results without decimals")


def add_query_arguments(parser):
    query = parser.add_argument_group('Query', 'Unit tables introspection')
    query.add_argument("-l", "--list", action="store_true", help="List kinds and their units")
    query.add_argument("-k", "--kind", action="store", metavar="UNIT", help="Print the kind of a unit")


def get_arg_parser():
    parser = argparse.ArgumentParser(
        prog=f'pyuc v{version}',
        description="Convert quantities between units of the same kind"
    )
    parser.add_argument('value', nargs='?', help='Value with unit to convert, e.g. "5 pounds" or "5\' 2\\""')
    parser.add_argument('unit', nargs='?', help="Target unit, e.g. oz")
    parser.add_argument("-c", "--config", action="store", help="Configuration .toml file")
    parser.add_argument("-v", "--version", action='version',
                        version=f'pyuc v{version}', help="Show version")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug messages")

    add_format_arguments(parser)
    add_query_arguments(parser)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = get_arg_parser()
    args = parser.parse_args(argv)

    if args.debug:
        set_log_level(logging.DEBUG)
        logger.info("Debug messages enabled")

    try:
        converter = basicConfig(args.config, precision=args.precision, allow_exact_results=args.exact)
    except (ConfigurationError, OSError) as exc:
        logger.error(f"Can't load configuration: {exc}")
        return 2

    if args.list:
        for kind in converter.registry.kinds:
            print(f"{kind}: {', '.join(converter.registry.units_of(kind))}")
        return 0

    if args.kind:
        if (kind := converter.kind_of_unit(args.kind)) is None:
            print(f"unknown unit {args.kind}")
            return 1
        print(kind)
        return 0

    if args.value is None or args.unit is None:
        parser.print_usage(sys.stderr)
        return 2

    result = converter.to(args.value, args.unit)
    print(converter.as_string(result))
    return 1 if isinstance(result, ConversionError) else 0


if __name__ == '__main__':
    sys.exit(main())
