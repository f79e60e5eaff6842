import argparse
import sys

from colorama import just_fix_windows_console

from twa.core.client import HttpClient
from twa.core.config import VERSION, Config
from twa.core.engine import Engine
from twa.core.errors import UsageError
from twa.reporters.console import Log

USAGE = "twa [-w] [-v] [-V] <domain>"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="twa", usage=USAGE,
        description="Tiny web auditor: HTTP/TLS security posture of one site")
    p.add_argument("-w", "--www", action="store_true",
                   help="also audit the www. variant of the domain")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="diagnostic trace on stderr")
    p.add_argument("-V", "--version", action="store_true",
                   help="print the version and exit")
    p.add_argument("domain", nargs="?", help="bare hostname, e.g. example.com")
    return p


def check_domain(domain) -> str:
    if not domain:
        raise UsageError("missing domain")
    if "://" in domain:
        raise UsageError(f"expected a bare domain, not a URL: {domain}")
    return domain.strip().lower()


def main(argv=None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    if args.version:
        print(f"twa version {VERSION}")
        return 0

    try:
        domain = check_domain(args.domain)
        config = Config.from_env()
    except UsageError as e:
        p.print_usage(sys.stderr)
        print(f"twa: error: {e}", file=sys.stderr)
        return 1

    just_fix_windows_console()
    log = Log(verbose=args.verbose, no_color=config.no_color)

    with HttpClient(config, logger=log) as client:
        engine = Engine(client=client, logger=log)
        engine.audit(domain, www=args.www, verbose=args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
