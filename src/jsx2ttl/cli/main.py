"""Main CLI entry point."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import rich.panel
import rich_click as click
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from jsx2ttl import __version__
from jsx2ttl.compiler.ast_nodes import Node, Program
from jsx2ttl.compiler.exceptions import (
    InvalidOptionsError,
    Jsx2TtlError,
    TreeFormatError,
)
from jsx2ttl.compiler.options import TransformOptions, ensure_cwd_importable
from jsx2ttl.compiler.rewriter import ElementRewriter
from jsx2ttl.compiler.serialization import dumps, load_file

console = Console(stderr=True)

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_HELPTEXT_FIRST = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running 'jsx2ttl --help' for more information."
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_SWITCH = "cyan"
click.rich_click.STYLE_METAVAR = "dim white"
click.rich_click.STYLE_USAGE_COMMAND = "cyan"
click.rich_click.STYLE_USAGE = "dim"

click.rich_click.OPTION_GROUPS = {
    "jsx2ttl lower": [
        {
            "name": "Import",
            "options": ["--import-path", "--import-name", "--import-as", "--default-import"],
        },
        {
            "name": "Output shape",
            "options": ["--call-without-new", "--attribute-transform", "--extra-args"],
        },
    ]
}
click.rich_click.OPTION_GROUPS["jsx2ttl check"] = click.rich_click.OPTION_GROUPS[
    "jsx2ttl lower"
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
    )


def _resolve_options(
    config: Optional[str],
    import_path: Optional[str],
    import_name: Optional[str],
    import_as: Optional[str],
    default_import: bool,
    call_without_new: bool,
    attribute_transform: Optional[str],
    extra_args: Optional[str],
) -> TransformOptions:
    """Merge ``[tool.jsx2ttl]`` from pyproject.toml with command line flags."""
    overrides: Dict[str, Any] = {
        "import_path": import_path,
        "import_name": import_name,
        "import_as": import_as,
        "attribute_transform": attribute_transform,
        "extra_args_fn": extra_args,
    }
    if default_import:
        overrides["is_default_import"] = True
    if call_without_new:
        overrides["use_constructor_call"] = False

    # Hooks usually live next to the sources being compiled
    ensure_cwd_importable()

    config_path = Path(config) if config else Path("pyproject.toml")
    try:
        if config_path.is_file():
            return TransformOptions.from_pyproject(config_path, overrides)
        if config:
            raise click.BadParameter(
                f"Config file '{config}' not found", param_hint="--config"
            )
        return TransformOptions.from_mapping(
            {k: v for k, v in overrides.items() if v is not None}
        )
    except InvalidOptionsError as e:
        raise click.UsageError(str(e))


def _run(
    tree_path: str, source_path: Optional[str], options: TransformOptions
) -> Tuple[Node, ElementRewriter]:
    try:
        tree = load_file(Path(tree_path))
    except TreeFormatError as e:
        raise click.ClickException(str(e))

    source = None
    if source_path:
        source = Path(source_path).read_text(encoding="utf-8")

    rewriter = ElementRewriter(
        options, source=source, file_path=source_path or tree_path
    )
    try:
        if isinstance(tree, Program):
            rewritten: Node = rewriter.transform_program(tree)
        else:
            rewritten = rewriter.rewrite(tree)
    except Jsx2TtlError as e:
        console.print(
            rich.panel.Panel(
                Text(e.diagnostic()),
                title=f"[bold red]{type(e).__name__}[/]",
                border_style="red",
                expand=False,
            )
        )
        raise SystemExit(1)
    return rewritten, rewriter


def _shared_options(func: Any) -> Any:
    decorators = [
        click.argument("tree", type=click.Path(exists=True, dir_okay=False)),
        click.option(
            "--source",
            type=click.Path(exists=True, dir_okay=False),
            default=None,
            help="Original source file, used to quote code in error reports.",
        ),
        click.option(
            "--config",
            default=None,
            help="pyproject.toml holding a [tool.jsx2ttl] table (default: ./pyproject.toml).",
        ),
        click.option("--import-path", default=None, help="Module the template class is imported from."),
        click.option("--import-name", default=None, help="Exported name of the template class."),
        click.option("--import-as", default=None, help="Local alias (default: import name)."),
        click.option("--default-import", is_flag=True, help="Use a default import."),
        click.option(
            "--call-without-new",
            is_flag=True,
            help="Call the template as a function instead of constructing it.",
        ),
        click.option(
            "--attribute-transform",
            default=None,
            help="Attribute hook as 'module:function'.",
        ),
        click.option(
            "--extra-args",
            default=None,
            help="Extra-argument hook as 'module:function'.",
        ),
        click.option("-v", "--verbose", is_flag=True, help="Log every lowered element."),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


@click.group(
    help=f"""
[bold white on cyan] jsx2ttl [/] [bold cyan]v{__version__}[/] Lower JSX trees to tagged templates.

Run [bold cyan]jsx2ttl lower TREE.json[/] to rewrite a parsed tree.
"""
)
@click.version_option(__version__)
def cli() -> None:
    pass


@cli.command()
@_shared_options
@click.option("-o", "--output", default=None, help="Write the rewritten tree here (default: stdout).")
def lower(
    tree: str,
    source: Optional[str],
    config: Optional[str],
    import_path: Optional[str],
    import_name: Optional[str],
    import_as: Optional[str],
    default_import: bool,
    call_without_new: bool,
    attribute_transform: Optional[str],
    extra_args: Optional[str],
    verbose: bool,
    output: Optional[str],
) -> None:
    """Rewrite every element of a JSON tree and print the result."""
    _configure_logging(verbose)
    options = _resolve_options(
        config,
        import_path,
        import_name,
        import_as,
        default_import,
        call_without_new,
        attribute_transform,
        extra_args,
    )
    rewritten, _ = _run(tree, source, options)

    try:
        text = dumps(rewritten)
    except TreeFormatError as e:
        raise click.ClickException(str(e))
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        console.print(f"✅ Wrote [cyan]{output}[/]")
    else:
        click.echo(text)


@cli.command()
@_shared_options
def check(
    tree: str,
    source: Optional[str],
    config: Optional[str],
    import_path: Optional[str],
    import_name: Optional[str],
    import_as: Optional[str],
    default_import: bool,
    call_without_new: bool,
    attribute_transform: Optional[str],
    extra_args: Optional[str],
    verbose: bool,
) -> None:
    """Lower a tree without writing it, reporting what would change."""
    _configure_logging(verbose)
    options = _resolve_options(
        config,
        import_path,
        import_name,
        import_as,
        default_import,
        call_without_new,
        attribute_transform,
        extra_args,
    )
    _, rewriter = _run(tree, source, options)
    click.echo(
        f"{tree}: {rewriter.elements_lowered} element(s) "
        f"({rewriter.templates_lowered} template(s), "
        f"{rewriter.components_lowered} component(s))"
    )


if __name__ == "__main__":
    cli()
