import argparse
import logging
import sys
from nvdgate.config import GateConfig
from nvdgate.core.aggregate import summarize
from nvdgate.core.errors import ConfigurationError, ScanError
from nvdgate.core.gate import gate
from nvdgate.plugins.scanners.grype import GrypeScanner
from nvdgate.plugins.scanners.registry import ScannerRegistry
from nvdgate.report import ReportGenerator

logger = logging.getLogger("nvdgate")

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_ERROR = 2

def _add_gate_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--fail-threshold", type=float, help="Fail when the highest score is above this value. Default: 0 (any vulnerability). Can also use NVDGATE_FAIL_THRESHOLD env var.")
    parser.add_argument("--verbose-summary", action="store_true", default=None, help="Include clean dependencies in the summary table.")
    parser.add_argument("--config", help="Path to a JSON file with fail-threshold / verbose-summary / output-dir.")
    parser.add_argument("--output-dir", help="Directory holding the detailed scan reports. Default: target/nvd.")
    parser.add_argument("--verdict-json", help="Path to write the gate verdict as JSON.")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors in the summary.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Vulnerability risk summary and build gate")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Check Command
    check_parser = subparsers.add_parser("check", help="Summarize and gate an existing scan report")
    check_parser.add_argument("report", help="Path to the scan report")
    check_parser.add_argument("--scanner", choices=ScannerRegistry.available_scanners(), default="dependency-check", help="Format of the scan report")
    _add_gate_arguments(check_parser)

    # Scan Command
    scan_parser = subparsers.add_parser("scan", help="Scan a target with grype, then summarize and gate")
    scan_parser.add_argument("target", help="Target to scan (path or image)")
    _add_gate_arguments(scan_parser)

    return parser

def load_config(args) -> GateConfig:
    base = GateConfig.from_file(args.config) if args.config else None
    return GateConfig.from_sources(
        fail_threshold=args.fail_threshold,
        verbose_summary=args.verbose_summary,
        output_dir=args.output_dir,
        base=base
    )

def run(args) -> int:
    config = load_config(args)

    if args.command == "scan":
        scan_result = GrypeScanner().scan(args.target)
    else:
        scanner = ScannerRegistry.get_scanner(args.scanner)
        scan_result = scanner.scan(args.report)
    logger.info(f"Loaded {len(scan_result.dependencies)} dependencies from {scan_result.tool_name}")

    summary = summarize(scan_result, include_clean=config.verbose_summary)
    verdict = gate(summary.worst_score, config.fail_threshold)

    reporter = ReportGenerator(summary, verdict, output_dir=config.output_dir,
                               verbose=config.verbose_summary, use_color=not args.no_color)
    print(reporter.render())

    if args.verdict_json:
        reporter.write_verdict(args.verdict_json)

    return EXIT_FAILED if verdict.failed else EXIT_PASSED

def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    # Setup logging
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    try:
        return run(args)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_ERROR
    except ScanError as e:
        logger.error(f"Scan error: {e}")
        return EXIT_ERROR

if __name__ == "__main__":
    sys.exit(main())
