# bootstrap/__main__.py
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='python -m bootstrap', description='Bootstrap a site directory.')
    parser.add_argument('directory', help='site directory containing site-config.yaml')
    parser.add_argument('--env', default=None, help='environment overlay (site-config.<env>.yaml)')
    parser.add_argument('--auto-pages', choices=['skip_existing', 'overwrite'], default='skip_existing',
                        help='what auto-discovered pages do to routes created by plugins')
    parser.add_argument('--timeout', type=float, default=None, help='abort the bootstrap after this many seconds')
    parser.add_argument('--log-level', default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    parser.add_argument('--version', action='version', version='%(prog)s 0.1.0')
    return parser


async def main_cli_entry(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    directory = Path(args.directory)
    if not directory.is_dir():
        print(f'Error: Site directory not found: {directory}')
        return 1

    from . import bootstrap
    from .exceptions import BootstrapError

    try:
        result = await bootstrap(directory, env=args.env, auto_page_policy=args.auto_pages,
                                 timeout_seconds=args.timeout, exit_on_fatal=True)
    except BootstrapError as e:
        logger.error(f'Bootstrap failed: {e}', exc_info=True)
        print(f'\n✗ BOOTSTRAP ERROR: {e}')
        return 2

    summary = result.get_summary()
    print(f'\n=== Bootstrap Summary (Run ID: {summary["run_id"]}) ===')
    print(f'Success: {summary["success"]}')
    print(f'Plugins: {", ".join(summary["plugins"]) or "none"}')
    print(f'Extensions: {" ".join(summary["extensions"])}')
    print(f'Pages: {summary["page_count"]}')
    for page in result.pages:
        print(f'  {page.route_path} -> {page.component_path}')
    if summary['degraded_phases']:
        print(f'Degraded phases: {summary["degraded_phases"]}')
    if summary['bootstrap_duration'] is not None:
        print(f'Duration: {summary["bootstrap_duration"]:.2f}s')
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    try:
        sys.exit(asyncio.run(main_cli_entry(argv)))
    except KeyboardInterrupt:
        print('\n✗ Bootstrap interrupted by user')
        sys.exit(130)


if __name__ == '__main__':
    main()
