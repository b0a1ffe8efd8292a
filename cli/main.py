"""
Main CLI entry point for the agent configuration converter.

This module provides the command-line interface for converting AI coding
assistant configuration between dialects. It supports:
- Single-file conversion with format auto-detection
- Directory batch conversion into one target dialect
- Dialect scoping options (alwaysApply, applyTo, inclusion, ...)
- Dry-run mode and JSON output
- Package quality scoring

Usage:
    python -m cli.main --convert-file .cursor/rules/style.mdc \
                       --target-format copilot --apply-to "src/**/*.py"
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

from adapters import create_default_registry
from core.canonical_models import CanonicalPackage, ConversionResult, Dialect
from core.config import get_settings
from core.errors import ConversionError
from core.orchestrator import ConversionOrchestrator
from core.registry import FormatRegistry

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """
    Create argument parser for CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description='Convert AI coding assistant configuration between dialects',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a Cursor rule into Copilot instructions
  %(prog)s --convert-file .cursor/rules/style.mdc --target-format copilot \\
           --apply-to "src/**/*.py"

  # Convert a Claude agent into a Kiro steering file
  %(prog)s --convert-file .claude/agents/reviewer.md --target-format kiro \\
           --inclusion fileMatch --file-match-pattern "**/*.ts"

  # Convert every Claude agent in a directory into Cursor rules
  %(prog)s --source-dir .claude/agents --target-dir .cursor/rules \\
           --source-format claude --target-format cursor --no-always-apply

  # Score a package
  %(prog)s --convert-file SKILL.md --score
        """
    )

    # Single-file conversion mode
    parser.add_argument(
        '--convert-file',
        type=Path,
        help='Single file to convert (mutually exclusive with --source-dir)'
    )

    parser.add_argument(
        '--output',
        type=Path,
        help='Output file path for single-file conversion (auto-generated if not specified)'
    )

    # Directory mode arguments
    parser.add_argument(
        '--source-dir',
        type=Path,
        help='Source directory containing configuration files'
    )

    parser.add_argument(
        '--target-dir',
        type=Path,
        help='Target directory for converted files'
    )

    # Format arguments (optional for auto-detection in file mode)
    parser.add_argument(
        '--source-format',
        type=str,
        choices=Dialect.names(),
        help='Source format name (auto-detected if not specified)'
    )

    parser.add_argument(
        '--target-format',
        type=str,
        choices=Dialect.names(),
        help='Target format name (auto-detected from output if not specified)'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be done without making changes'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose output with detailed logging'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Print conversion results as JSON'
    )

    parser.add_argument(
        '--workers',
        type=int,
        help='Worker threads for directory conversion (default: from settings)'
    )

    # Dialect options
    always_apply = parser.add_mutually_exclusive_group()
    always_apply.add_argument(
        '--always-apply',
        dest='always_apply',
        action='store_const',
        const=True,
        help='[Cursor] Apply the rule to every request'
    )
    always_apply.add_argument(
        '--no-always-apply',
        dest='always_apply',
        action='store_const',
        const=False,
        help='[Cursor] Only apply the rule to matching files'
    )

    parser.add_argument(
        '--globs',
        type=str,
        help='[Cursor] Comma-separated file globs'
    )

    parser.add_argument(
        '--apply-to',
        type=str,
        help='[Copilot] applyTo glob pattern'
    )

    parser.add_argument(
        '--inclusion',
        type=str,
        choices=['always', 'fileMatch', 'manual'],
        help='[Kiro] Steering inclusion mode'
    )

    parser.add_argument(
        '--file-match-pattern',
        type=str,
        help='[Kiro] Pattern for fileMatch inclusion'
    )

    parser.add_argument(
        '--domain',
        type=str,
        help='[Kiro] Domain used for the steering file name'
    )

    parser.add_argument(
        '--description',
        type=str,
        help='[Claude skill] Skill description'
    )

    parser.add_argument(
        '--project',
        type=str,
        help='[AGENTS.md] Project name'
    )

    parser.add_argument(
        '--scope',
        type=str,
        help='[AGENTS.md] Scope of the instructions'
    )

    # Other modes
    parser.add_argument(
        '--score',
        action='store_true',
        help='Print the quality score of --convert-file instead of converting'
    )

    parser.add_argument(
        '--list-formats',
        action='store_true',
        help='List supported formats and exit'
    )

    parser.add_argument(
        '--gui',
        action='store_true',
        help='Launch the graphical user interface'
    )

    return parser


def setup_registry() -> FormatRegistry:
    """
    Initialize format registry with all available adapters.

    Returns:
        FormatRegistry with registered adapters
    """
    return create_default_registry()


def detect_source(registry: FormatRegistry, source_file: Path):
    """Detect the dialect of a file from its path, then from its content."""
    adapter = registry.detect_format(source_file)
    if adapter is not None:
        return adapter
    try:
        content = source_file.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Cannot read %s for content detection: %s", source_file, e)
        return None
    adapter = registry.detect_content(content)
    if adapter is not None:
        logger.info("Detected %s from the content of %s", adapter.format_name, source_file)
    return adapter


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')


def build_options(args) -> Dict[str, Any]:
    """Collect dialect options that were given on the command line."""
    candidates = {
        'always_apply': getattr(args, 'always_apply', None),
        'globs': getattr(args, 'globs', None),
        'apply_to': getattr(args, 'apply_to', None),
        'inclusion': getattr(args, 'inclusion', None),
        'file_match_pattern': getattr(args, 'file_match_pattern', None),
        'domain': getattr(args, 'domain', None),
        'description': getattr(args, 'description', None),
        'project': getattr(args, 'project', None),
        'scope': getattr(args, 'scope', None),
    }
    return {key: value for key, value in candidates.items() if value is not None}


def print_result(result: ConversionResult, output_file: Optional[Path], args) -> None:
    if args.json:
        data = result.to_dict()
        data['output'] = str(output_file) if output_file else None
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return
    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    if args.verbose:
        print(f"  Quality score: {result.quality_score}")
        print(f"  Lossy: {'yes' if result.lossy_conversion else 'no'}")


def list_formats(registry: FormatRegistry) -> int:
    for name in registry.list_formats():
        adapter = registry.get_adapter(name)
        print(f"{name:<14} {adapter.file_extension}")
    return 0


def score_file(args, registry: FormatRegistry) -> int:
    """
    Decode a file and print its package quality score.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    from scoring import PackageSnapshot, build_evaluator, score_package

    source_file = args.convert_file.expanduser().resolve()
    if not source_file.is_file():
        print(f"Error: File not found: {source_file}", file=sys.stderr)
        return 1

    adapter = (registry.get_adapter(args.source_format) if args.source_format
               else detect_source(registry, source_file))
    if not adapter:
        print(f"Error: Cannot auto-detect format for: {source_file}", file=sys.stderr)
        return 1

    pkg, _ = adapter.read(source_file)
    settings = get_settings()
    score = score_package(PackageSnapshot(package=pkg, description=pkg.description),
                          evaluator=build_evaluator(settings),
                          timeout=settings.evaluation_timeout)
    if args.json:
        print(json.dumps({'package': pkg.id, 'format': adapter.format_name, 'score': score}))
    else:
        print(f"{pkg.id}: {score:.2f} / 5")
    return 0


def convert_single_file(args) -> int:
    """
    Convert a single file from one format to another.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    registry = setup_registry()

    # 1. Validate source file
    source_file = args.convert_file.expanduser().resolve()
    if not source_file.exists():
        print(f"Error: File not found: {source_file}", file=sys.stderr)
        return 1
    if source_file.is_dir():
        print(f"Error: Path is a directory, not a file: {source_file}", file=sys.stderr)
        return 1

    # 2. Determine source adapter (explicit or auto-detect)
    if args.source_format:
        source_adapter = registry.get_adapter(args.source_format)
        if not source_adapter:
            print(f"Error: Unknown source format: {args.source_format}", file=sys.stderr)
            return 1
    else:
        source_adapter = detect_source(registry, source_file)
        if not source_adapter:
            print(f"Error: Cannot auto-detect format for: {source_file}", file=sys.stderr)
            return 1

    # 3. Determine target adapter (explicit or from output path)
    if args.target_format:
        target_adapter = registry.get_adapter(args.target_format)
        if not target_adapter:
            print(f"Error: Unknown target format: {args.target_format}", file=sys.stderr)
            return 1
    elif args.output:
        target_adapter = registry.detect_format(args.output)
        if not target_adapter:
            print(f"Error: Cannot auto-detect target format from: {args.output}", file=sys.stderr)
            return 1
    else:
        print("Error: --target-format or --output required for conversion", file=sys.stderr)
        return 1

    # 4. Perform conversion
    try:
        with open(source_file, 'r', encoding='utf-8') as f:
            content = f.read()

        orchestrator = ConversionOrchestrator(registry)
        result = orchestrator.convert(content, source_adapter.dialect, target_adapter.dialect,
                                      options=build_options(args),
                                      hints={'filename': source_file.name})

        # 5. Determine output path (explicit or the encoder's suggestion)
        if args.output:
            output_file = args.output.expanduser().resolve()
        else:
            output_file = source_file.parent / (result.filename or
                                                f"{source_file.stem}{target_adapter.file_extension}")

        if args.verbose and not args.json:
            print(f"Converting {source_file} -> {output_file}")
            print(f"  Source format: {source_adapter.format_name}")
            print(f"  Target format: {target_adapter.format_name}")

        print_result(result, output_file, args)

        if args.dry_run:
            if not args.json:
                print(f"Would write to: {output_file}")
                if args.verbose:
                    print("--- Output content ---")
                    print(result.content)
            return 0

        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(result.content)

        if args.verbose and not args.json:
            print(f"Successfully converted to {output_file}")
        return 0

    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc(file=sys.stderr)
        return 1


def collect_packages(source_dir: Path, registry: FormatRegistry,
                     source_format: Optional[str], verbose: bool) -> List[CanonicalPackage]:
    """Decode every file in a directory that belongs to the source dialect."""
    adapter = registry.get_adapter(source_format) if source_format else None
    packages = []
    for path in sorted(source_dir.rglob('*')):
        if not path.is_file():
            continue
        if adapter is not None:
            file_adapter = adapter if (path.name.endswith(adapter.file_extension)
                                       or adapter.can_handle(path)) else None
        else:
            file_adapter = registry.detect_format(path)
        if file_adapter is None:
            continue

        pkg, warnings = file_adapter.read(path)
        if verbose:
            print(f"Decoded {path} ({file_adapter.format_name})")
            for warning in warnings:
                print(f"  Warning: {warning}")
        packages.append(pkg)
    return packages


def output_path(target_dir: Path, pkg: CanonicalPackage, filename: str, used: Set[Path]) -> Path:
    path = target_dir / filename
    if path in used:
        # Dialects with fixed file names (SKILL.md, AGENTS.md) get one directory per package.
        path = target_dir / pkg.id / filename
    used.add(path)
    return path


def convert_directory(args) -> int:
    """
    Convert every file of a source directory into the target format.

    Returns:
        Exit code (0 when every package converted, 1 otherwise)
    """
    source_dir = args.source_dir.expanduser().resolve()
    target_dir = args.target_dir.expanduser().resolve()

    if not source_dir.exists():
        print(f"Error: Source directory does not exist: {source_dir}", file=sys.stderr)
        return 1
    if not source_dir.is_dir():
        print(f"Error: Source path is not a directory: {source_dir}", file=sys.stderr)
        return 1
    if target_dir.exists() and not target_dir.is_dir():
        print(f"Error: Target path exists but is not a directory: {target_dir}", file=sys.stderr)
        return 1

    registry = setup_registry()
    packages = collect_packages(source_dir, registry, args.source_format, args.verbose)
    if not packages:
        print(f"No convertible files found in {source_dir}", file=sys.stderr)
        return 0

    orchestrator = ConversionOrchestrator(registry)
    workers = args.workers or get_settings().batch_workers
    outcomes = orchestrator.reconvert_batch(packages, args.target_format,
                                            options=build_options(args), max_workers=workers)

    used: Set[Path] = set()
    failures = 0
    report = []
    for pkg, outcome in zip(packages, outcomes):
        if not outcome.ok:
            failures += 1
            print(f"Error: {pkg.id}: {outcome.error}", file=sys.stderr)
            report.append({'package': pkg.id, 'error': str(outcome.error)})
            continue

        result = outcome.result
        path = output_path(target_dir, pkg, result.filename or f"{pkg.id}.md", used)
        entry = result.to_dict()
        entry.update({'package': pkg.id, 'output': str(path)})
        report.append(entry)

        if args.dry_run:
            if not args.json:
                print(f"Would write to: {path}")
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(result.content)
        if args.verbose and not args.json:
            print(f"Wrote {path} (score {result.quality_score})")
            for warning in result.warnings:
                print(f"  Warning: {warning}")

    if args.json:
        print(json.dumps(report, indent=2, ensure_ascii=False))
    elif not args.dry_run:
        print(f"Converted {len(packages) - failures} of {len(packages)} file(s) to {args.target_format}")
    return 1 if failures else 0


def main(argv: Optional[list] = None):
    """
    Main entry point for CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    if argv is None:
        argv = sys.argv[1:]

    # Check for GUI launch conditions:
    # 1. Explicit --gui flag
    # 2. No arguments provided (default to GUI)
    if '--gui' in argv or not argv:
        try:
            from gui.main import start as start_gui
            start_gui()
            return 0
        except ImportError as e:
            print(f"Error: Could not import GUI: {e}", file=sys.stderr)
            print("Ensure nicegui is installed: pip install nicegui", file=sys.stderr)
            return 1
        except Exception as e:
            print(f"Error launching GUI: {e}", file=sys.stderr)
            return 1

    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.list_formats:
        return list_formats(setup_registry())

    if args.convert_file:
        if args.source_dir:
            print("Error: --convert-file and --source-dir are mutually exclusive", file=sys.stderr)
            return 1
        if args.score:
            return score_file(args, setup_registry())
        return convert_single_file(args)

    # Directory mode - validate required arguments
    if not args.source_dir:
        print("Error: --source-dir or --convert-file is required", file=sys.stderr)
        return 1
    if not args.target_dir:
        print("Error: --target-dir is required for directory conversion", file=sys.stderr)
        return 1
    if not args.target_format:
        print("Error: --target-format is required for directory conversion", file=sys.stderr)
        return 1

    try:
        return convert_directory(args)
    except KeyboardInterrupt:
        print("\nConversion cancelled by user", file=sys.stderr)
        return 1
    except (ConversionError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc(file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
