"""
latex2html - Compile a LaTeX-like document into an HTML page.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from internal.config.manager import ConfigManager
from lib.latex import LatexCompiler, LatexParseError
from lib.logging_utils import initLogging
from lib.utils import jsonDumps

# Configure basic logging first
logging.basicConfig(format="%(levelname)s: %(message)s", level=logging.WARNING)
logger = logging.getLogger(__name__)


class LatexHtmlApp:
    """Command line application that reads, compiles and writes documents."""

    def __init__(self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None):
        """Initialize application with configuration and logging."""
        self.configManager = ConfigManager(configPath, configDirs)

        initLogging(self.configManager.getLoggingConfig())

        self.encoding = self.configManager.getOutputConfig()["encoding"]
        self.compilerOptions = self.configManager.getCompilerConfig()

    def createCompiler(self, injectMathScript: Optional[bool] = None) -> LatexCompiler:
        """Create compiler with configured options, optionally overriding math script injection."""
        options = dict(self.compilerOptions)
        if injectMathScript is not None:
            options["inject_math_script"] = injectMathScript
        return LatexCompiler(options)

    def readSource(self, inputPath: str) -> str:
        """Read LaTeX source, raises OSError or UnicodeDecodeError on failure."""
        logger.debug(f"Reading {inputPath} ({self.encoding})")
        with open(inputPath, "r", encoding=self.encoding) as f:
            return f.read()

    def writeOutput(self, outputPath: Optional[str], content: str) -> None:
        """Write result to file or to stdout if no path given, raises OSError or UnicodeEncodeError on failure."""
        if outputPath is None:
            sys.stdout.write(content)
            if not content.endswith("\n"):
                sys.stdout.write("\n")
            return

        with open(outputPath, "w", encoding=self.encoding) as f:
            f.write(content)
        logger.info(f"Wrote {len(content)} characters to {outputPath}")

    def run(self, args: argparse.Namespace) -> int:
        """Run the requested action, returns process exit code."""
        try:
            source = self.readSource(args.input)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {args.input}: {e}")
            print(f"Error: cannot read {args.input}: {e}", file=sys.stderr)
            return 1

        compiler = self.createCompiler(False if args.no_math_script else None)

        if args.validate:
            report = compiler.validate(source)
            print(jsonDumps(report, indent=2))
            return 0 if report["valid"] else 1

        try:
            if args.ast:
                result = jsonDumps(compiler.get_ast_json(source), indent=2)
            else:
                result = compiler.compile(source)
        except LatexParseError as e:
            logger.error(f"Compilation of {args.input} failed: {e}")
            print(f"Error: compilation failed: {e}", file=sys.stderr)
            return 1

        for name in compiler.get_stats()["unknown_commands"]:
            logger.warning(f"Unknown command \\{name} in {args.input}")

        try:
            self.writeOutput(args.output, result)
        except (OSError, UnicodeEncodeError) as e:
            logger.error(f"Failed to write {args.output}: {e}")
            print(f"Error: cannot write {args.output}: {e}", file=sys.stderr)
            return 1

        if args.output is not None:
            print(f"Compilation successful: {args.output}")
        return 0


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="latex2html - compile a LaTeX-like document into HTML")
    parser.add_argument("input", nargs="?", help="Path to LaTeX source file")
    parser.add_argument("output", nargs="?", help="Path to write HTML to (default: stdout)")
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times)",
    )
    parser.add_argument(
        "--ast",
        action="store_true",
        help="Write the parsed syntax tree as JSON instead of HTML",
    )
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Print validation report as JSON and exit",
    )
    parser.add_argument(
        "--no-math-script",
        action="store_true",
        help="Do not inject the MathJax script block",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit",
    )
    args = parser.parse_args(argv)
    args.config = os.path.abspath(args.config)

    # Convert config directories to absolute paths
    if args.config_dir:
        args.config_dir = [os.path.abspath(dir_path) for dir_path in args.config_dir]

    if args.input is None and not args.print_config:
        parser.error("the following arguments are required: input")

    return args


def prettyPrintConfig(configManager: ConfigManager):
    """Pretty-print the loaded configuration."""
    print("=== latex2html Configuration ===")
    print()
    print(jsonDumps(configManager.config, indent=2))
    print()
    print("=== Compiler options ===")
    print(jsonDumps(configManager.getCompilerConfig(), indent=2))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    if args.print_config:
        prettyPrintConfig(ConfigManager(args.config, args.config_dir))
        return 0

    app = LatexHtmlApp(configPath=args.config, configDirs=args.config_dir)
    try:
        return app.run(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
