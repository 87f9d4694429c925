"""
Command line interface for ArchGraph.

Prints diagrams and trees as JSON, or starts the API server.

Usage:
    archgraph serve
    archgraph system SYS-001
    archgraph paths SYS-001 SYS-004 --records snapshot.json
    archgraph landscape
    archgraph capabilities --system SYS-001
"""

import argparse
import json
import sys

from .shared import (
    get_settings, setup_logging, create_record_source, InMemoryRecordSource, ArchGraphError,
)
from .services.system_dependencies import SystemDependencyService
from .services.business_capabilities import BusinessCapabilityService


def _record_source(args):
    if args.records:
        return InMemoryRecordSource.from_json_file(args.records)
    return create_record_source()


def _print_json(model, args) -> None:
    print(json.dumps(model.to_json_dict(), indent=args.indent, ensure_ascii=False))


def serve_command(args):
    """Start the API server"""
    import uvicorn
    from .api import create_app

    settings = get_settings()
    uvicorn.run(
        create_app(),
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        log_level=settings.log_level.lower()
    )
    return 0


def system_command(args):
    """Print the dependency diagram of one system"""
    service = SystemDependencyService(_record_source(args))
    _print_json(service.generate_system_diagram(args.system_code), args)
    return 0


def paths_command(args):
    """Print every path between two systems as a diagram"""
    service = SystemDependencyService(_record_source(args))
    _print_json(service.find_all_paths_diagram(args.start, args.end), args)
    return 0


def landscape_command(args):
    """Print the landscape diagram"""
    service = SystemDependencyService(_record_source(args))
    _print_json(service.generate_landscape_diagram(), args)
    return 0


def capabilities_command(args):
    """Print the global or per-system capability tree"""
    service = BusinessCapabilityService(_record_source(args))
    if args.system:
        tree = service.get_system_capability_tree(args.system)
    else:
        tree = service.get_capability_tree()
    _print_json(tree, args)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='archgraph',
        description='ArchGraph: architecture diagrams from system integration records'
    )
    parser.add_argument('--log-level', default=None, help='Override the configured log level')

    # Shared by every command that reads records
    records_parent = argparse.ArgumentParser(add_help=False)
    records_parent.add_argument('--records', default=None,
                                help='JSON snapshot to read instead of the core service')
    records_parent.add_argument('--indent', type=int, default=2, help='JSON indentation')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    serve_parser = subparsers.add_parser('serve', help='Start the API server')
    serve_parser.add_argument('--host', default=None, help='Bind host')
    serve_parser.add_argument('--port', type=int, default=None, help='Bind port')
    serve_parser.set_defaults(func=serve_command)

    system_parser = subparsers.add_parser('system', parents=[records_parent],
                                          help='Dependency diagram of one system')
    system_parser.add_argument('system_code', help='System code')
    system_parser.set_defaults(func=system_command)

    paths_parser = subparsers.add_parser('paths', parents=[records_parent],
                                         help='All integration paths between two systems')
    paths_parser.add_argument('start', help='Source system code')
    paths_parser.add_argument('end', help='Target system code')
    paths_parser.set_defaults(func=paths_command)

    landscape_parser = subparsers.add_parser('landscape', parents=[records_parent],
                                             help='Landscape diagram of every system')
    landscape_parser.set_defaults(func=landscape_command)

    capabilities_parser = subparsers.add_parser('capabilities', parents=[records_parent],
                                                help='Business capability tree')
    capabilities_parser.add_argument('--system', default=None, help='Limit the tree to one system')
    capabilities_parser.set_defaults(func=capabilities_command)

    return parser


def main(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # Keep stdout for JSON output
    setup_logging(args.log_level, stream=sys.stderr)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 1
    except ArchGraphError as e:
        print(f"Error ({type(e).__name__}): {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
