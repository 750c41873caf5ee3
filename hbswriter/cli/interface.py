# hbswriter/cli/interface.py
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click
from click_option_group import optgroup
from rich.console import Console as RichConsole
from rich.table import Table
import structlog

from hbswriter import __version__ as app_version
from hbswriter.config.loader import load_project_config, merge_context
from hbswriter.config.settings import DEFAULT_FILE_PATTERNS, DEFAULT_OUTPUT_EXTENSION, dest_file_for_extension
from hbswriter.core.writer import HandlebarsWriter
from hbswriter.exceptions import HbsWriterError, ConfigError
from hbswriter.logging_setup import configure_logging

log = structlog.get_logger(__name__)

def _parse_user_vars(user_vars: Tuple[str, ...]) -> Dict[str, str]:
    parsed: Dict[str, str] = {}
    for item in user_vars:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ConfigError(f"invalid --var '{item}', expected KEY=VALUE")
        parsed[key.strip()] = value
    return parsed

def _print_summary(written: List[Path], dest_dir: Path):
    console = RichConsole(stderr=True)
    table = Table(title=f"Rendered {len(written)} file(s)", title_justify="left", show_header=True)
    table.add_column("output", style="cyan")
    for path in written:
        try:
            shown = path.relative_to(dest_dir)
        except ValueError:
            shown = path
        table.add_row(str(shown))
    console.print(table)

def _pick(cli_value: Any, settings: Dict[str, Any], key: str, default: Any = None) -> Any:
    # command-line values win over the project config file.
    if cli_value not in (None, (), []):
        return cli_value
    return settings.get(key, default)

def _as_patterns(patterns: Any) -> List[str]:
    # a config file may give a single pattern string instead of a list.
    return [patterns] if isinstance(patterns, str) else list(patterns)

@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.argument("source", required=False, type=click.Path(file_okay=False, path_type=Path))
@click.argument("destination", required=False, type=click.Path(file_okay=False, path_type=Path))
@optgroup.group("Matching Options", help="Choose which templates are rendered.")
@optgroup.option("-f", "--files", "file_patterns", multiple=True, help="Glob patterns (relative to SOURCE) of templates to render. Default: **/*.hbs.")
@optgroup.group("Templating Options", help="Partials, helpers and template data.")
@optgroup.option("-p", "--partials", "partials", type=click.Path(file_okay=False), default=None, help="Directory of .hbs/.handlebars partials.")
@optgroup.option("-H", "--helpers", "helpers", type=click.Path(file_okay=False), default=None, help="Directory of Python helper files.")
@optgroup.option("-d", "--data", "data_files", multiple=True, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="JSON or TOML file merged into the template context.")
@optgroup.option("--var", "user_vars", multiple=True, metavar="KEY=VALUE", help="Context variable; wins over data files.")
@optgroup.option("--preserve-leading-separator", "preserve_leading_separator", is_flag=True, default=False, help="Register partial/helper names with a leading '/'.")
@optgroup.group("Output Options", help="Where and how rendered files are written.")
@optgroup.option("-x", "--extension", "extension", default=None, help=f"Output extension replacing hbs/handlebars. Default: {DEFAULT_OUTPUT_EXTENSION}.")
@optgroup.option("-q", "--quiet", "quiet", is_flag=True, default=False, help="Do not print the summary table.")
@optgroup.group("Logging", help="Diagnostic output.")
@optgroup.option("--log-level", "log_level", type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False), default="warning", help="Log level. Default: warning.")
@optgroup.option("--log-json", "log_json", is_flag=True, default=False, help="Emit logs as JSON lines on stderr.")
@click.version_option(app_version, "--version", prog_name="hbswriter")
def main_cli(source: Optional[Path], destination: Optional[Path], file_patterns: Tuple[str, ...],
             partials: Optional[str], helpers: Optional[str], data_files: Tuple[Path, ...],
             user_vars: Tuple[str, ...], preserve_leading_separator: bool,
             extension: Optional[str], quiet: bool, log_level: str, log_json: bool):
    """Render the Handlebars templates under SOURCE into DESTINATION."""
    configure_logging(log_level, json_output=log_json)
    try:
        settings = load_project_config()
        source_dir = _pick(source, settings, "source")
        dest_dir = _pick(destination, settings, "destination")
        if not source_dir or not dest_dir:
            raise ConfigError("SOURCE and DESTINATION are required (as arguments or in the config file)")

        context = merge_context(
            list(data_files) or [Path(p) for p in settings.get("data_files", [])],
            {**settings.get("context", {}), **_parse_user_vars(user_vars)},
        )
        writer = HandlebarsWriter(
            Path(source_dir),
            _as_patterns(_pick(file_patterns, settings, "files", DEFAULT_FILE_PATTERNS)),
            context=context,
            dest_file=dest_file_for_extension(_pick(extension, settings, "extension", DEFAULT_OUTPUT_EXTENSION)),
            partials=_pick(partials, settings, "partials"),
            helpers=_pick(helpers, settings, "helpers"),
            preserve_leading_separator=bool(preserve_leading_separator or settings.get("preserve_leading_separator", False)),
        )
        written = writer.build(Path(dest_dir))
    except HbsWriterError as e:
        log.error("build_failed", error=str(e))
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)
    except Exception as e:
        log.critical("unexpected_critical_error_in_cli", message=str(e), exc_info=True)
        click.secho(f"Unexpected error: {e}", fg="red", err=True)
        sys.exit(1)

    if not quiet:
        _print_summary(written, Path(dest_dir))
