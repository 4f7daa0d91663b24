"""Batch command - render many text strings from a YAML batch file.

Example batch file::

    settings:
      output_dir: out
      jobs: 4
      continue_on_error: true
      escape: false

    defaults:
      fill: "#2c3e50"

    items:
      - ZALA13
      - text: Hello
        output: hello/hello.svg
        options:
          fontSize: 60

Relative paths are resolved against the directory holding the batch file.
"""

from __future__ import annotations

import concurrent.futures
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape as escape_markup
from rich.progress import Progress

from svg_textgen.config import Config, options_from_mapping, read_yaml_mapping
from svg_textgen.exceptions import BatchConfigError, TextGenError
from svg_textgen.options import DEFAULT_OPTIONS, RenderOptions
from svg_textgen.output import suggest_filename, write_svg
from svg_textgen.renderer import escape_text
from svg_textgen.renderer import render as render_svg

logger = logging.getLogger(__name__)
console = Console()


@dataclass
class BatchSettings:
    output_dir: Path = Path(".")
    jobs: int = 4
    continue_on_error: bool = False
    escape: bool = False


@dataclass
class BatchItem:
    """One text string to render and where to write it."""

    text: str
    options: RenderOptions
    output: Path | None = None

    def target(self, output_dir: Path) -> Path:
        """Return the explicit output path or a name derived from the text."""
        return self.output or output_dir / suggest_filename(self.text)


@dataclass
class BatchConfig:
    settings: BatchSettings = field(default_factory=BatchSettings)
    defaults: RenderOptions = field(default_factory=RenderOptions)
    items: list[BatchItem] = field(default_factory=list)


@dataclass
class BatchResult:
    item: BatchItem
    path: Path | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


def _resolve_path(value: Any, base_dir: Path) -> Path:
    path = Path(str(value)).expanduser()
    return path if path.is_absolute() else base_dir / path


def _parse_settings(data: Any, base_dir: Path, path: Path) -> BatchSettings:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise BatchConfigError("'settings' must be a mapping", path=path)

    settings = BatchSettings(output_dir=base_dir)
    if "output_dir" in data:
        settings.output_dir = _resolve_path(data["output_dir"], base_dir)

    jobs = data.get("jobs", settings.jobs)
    if isinstance(jobs, bool) or not isinstance(jobs, int) or jobs < 1:
        raise BatchConfigError(f"'jobs' must be a positive integer, got {jobs!r}", path=path)
    settings.jobs = jobs

    for name in ("continue_on_error", "escape"):
        value = data.get(name, getattr(settings, name))
        if not isinstance(value, bool):
            raise BatchConfigError(f"'{name}' must be true or false, got {value!r}", path=path)
        setattr(settings, name, value)
    return settings


def _parse_item(
    entry: Any,
    index: int,
    defaults: RenderOptions,
    base_dir: Path,
    path: Path,
) -> BatchItem:
    """Parse a compact (bare string) or full (mapping) item entry."""
    if isinstance(entry, (str, int, float)) and not isinstance(entry, bool):
        text = str(entry)
        if not text.strip():
            raise BatchConfigError(f"Item {index}: text must not be empty", path=path)
        return BatchItem(text=text, options=defaults)

    if not isinstance(entry, dict):
        raise BatchConfigError(
            f"Item {index}: expected a string or a mapping, got {type(entry).__name__}",
            path=path,
        )
    if "text" not in entry:
        raise BatchConfigError(f"Item {index}: missing 'text'", path=path)
    text = entry["text"]
    if isinstance(text, bool) or not isinstance(text, (str, int, float)) or not str(text).strip():
        raise BatchConfigError(f"Item {index}: 'text' must be a non-empty string", path=path)
    text = str(text)

    output = _resolve_path(entry["output"], base_dir) if entry.get("output") else None

    options = options_from_mapping(
        entry.get("options"),
        f"items[{index}].options",
        path,
        defaults=defaults,
        error_cls=BatchConfigError,
    )
    return BatchItem(text=text, output=output, options=options)


def load_batch_config(
    path: Path | str, base_defaults: RenderOptions = DEFAULT_OPTIONS
) -> BatchConfig:
    """Load and validate a YAML batch file.

    Args:
        path: Batch file location.
        base_defaults: Options the file's ``defaults`` section is layered on.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        BatchConfigError: If the file is malformed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Batch file not found: {path}")
    base_dir = path.parent

    data = read_yaml_mapping(path, BatchConfigError)
    settings = _parse_settings(data.get("settings"), base_dir, path)
    defaults = options_from_mapping(
        data.get("defaults"),
        "defaults",
        path,
        defaults=base_defaults,
        error_cls=BatchConfigError,
    )

    entries = data.get("items")
    if not entries:
        raise BatchConfigError("Batch file needs a non-empty 'items' list", path=path)
    if not isinstance(entries, list):
        raise BatchConfigError("'items' must be a list", path=path)

    items = [
        _parse_item(entry, i, defaults, base_dir, path)
        for i, entry in enumerate(entries)
    ]
    logger.debug("Loaded %d batch items from %s", len(items), path)
    return BatchConfig(settings=settings, defaults=defaults, items=items)


def render_item(item: BatchItem, output_dir: Path, escape: bool = False) -> BatchResult:
    """Render one item and write it, capturing write failures."""
    target = item.target(output_dir)
    text = escape_text(item.text) if escape else item.text
    svg = render_svg(text, item.options)
    try:
        written = write_svg(svg, target)
    except TextGenError as e:
        logger.warning("Failed to write %s: %s", target, e.message)
        return BatchResult(item=item, error=e.message)
    return BatchResult(item=item, path=written)


@click.command()
@click.argument("batch_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for items without an explicit output (overrides settings)",
)
@click.option("-j", "--jobs", type=click.IntRange(min=1), help="Parallel jobs")
@click.option("--continue-on-error", is_flag=True, help="Keep going after a failure")
@click.pass_context
def batch(
    ctx: click.Context,
    batch_file: Path,
    output_dir: Path | None,
    jobs: int | None,
    continue_on_error: bool,
) -> None:
    """Render every item listed in BATCH_FILE."""
    obj = ctx.obj or {}
    config = obj.get("config") or Config.load()

    try:
        batch_config = load_batch_config(batch_file, base_defaults=config.defaults)
    except BatchConfigError as e:
        console.print(f"[red]Error:[/red] {escape_markup(e.message)}")
        raise SystemExit(1) from e

    settings = batch_config.settings
    if output_dir is not None:
        settings.output_dir = output_dir
    if jobs is not None:
        settings.jobs = jobs
    if continue_on_error:
        settings.continue_on_error = True

    items = batch_config.items
    results: list[BatchResult] = []
    collected: set[concurrent.futures.Future] = set()
    stopped = False
    skipped = 0

    with Progress(console=console) as progress:
        task = progress.add_task("[green]Rendering...", total=len(items))

        with concurrent.futures.ThreadPoolExecutor(max_workers=settings.jobs) as executor:
            future_to_item = {
                executor.submit(render_item, item, settings.output_dir, settings.escape): item
                for item in items
            }

            for future in concurrent.futures.as_completed(future_to_item):
                result = future.result()
                results.append(result)
                collected.add(future)
                progress.advance(task)
                if not result.success:
                    label = escape_markup(result.item.text)
                    error = escape_markup(result.error or "")
                    console.print(f"[red]Error in '{label}':[/red] {error}")
                    if not settings.continue_on_error:
                        stopped = True
                        for pending in future_to_item:
                            pending.cancel()
                        break

        if stopped:
            # jobs already running when the batch stopped still wrote their files
            for future in future_to_item:
                if future.cancelled():
                    skipped += 1
                elif future not in collected:
                    results.append(future.result())
                    progress.advance(task)

    success_count = sum(1 for r in results if r.success)
    error_count = len(results) - success_count

    console.print()
    console.print("[bold]Batch complete:[/bold]")
    console.print(f"  [green]Success:[/green] {success_count}")
    console.print(f"  [red]Failed:[/red] {error_count}")
    if stopped:
        console.print(f"  [yellow]Skipped:[/yellow] {skipped}")
    console.print(f"  [blue]Output:[/blue] {settings.output_dir}")

    if error_count > 0:
        raise SystemExit(1)
