"""Command-line interface for the JSON file tree converter."""

import asyncio
import logging
import zipfile
import click
from pathlib import Path
from .converter import JSONFileTreeConverter
from .archive_packer import read_entries
from .rendering import render_tree
from .types import ArchiveError, ConversionOptions
from .utils.naming import generate_unique_filename
from .utils.size_calculator import SizeCalculator


@click.group()
@click.version_option(version="1.0.0")
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def main(verbose: bool):
    """JSON File Tree - Turn a JSON document into folders, files and a ZIP archive."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--expand', '-e', 'expand', multiple=True, help='Folder path to expand (repeatable)')
@click.option('--collapsed', is_flag=True, help='Show only top-level nodes unless --expand is given')
@click.option('--sanitize-names', is_flag=True, help='Replace characters invalid in filenames')
def tree(input_file: Path, expand: tuple, collapsed: bool, sanitize_names: bool):
    """Show the file tree a JSON file converts to."""
    converter = JSONFileTreeConverter(ConversionOptions(sanitize_names=sanitize_names))
    result = converter.build_tree(input_file.read_text(encoding='utf-8'))

    if not result.success:
        _report_errors("Conversion failed", result.errors)

    expanded = set(expand) if (collapsed or expand) else None
    if result.nodes:
        click.echo(render_tree(result.nodes, expanded=expanded))
    click.echo(f"{result.folder_count} folders, {result.file_count} files, "
               f"{SizeCalculator.format_file_size(result.total_size)}")


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Output archive path (default: converted_<timestamp>.zip)')
@click.option('--max-depth', default=256, show_default=True, help='Maximum folder nesting depth')
@click.option('--max-input-size', default=50 * 1024 * 1024, show_default=True,
              help='Maximum input size in bytes')
@click.option('--sanitize-names', is_flag=True, help='Replace characters invalid in filenames')
@click.option('--store', is_flag=True, help='Store entries without compression')
@click.option('--force', '-f', is_flag=True, help='Overwrite an existing output file')
def convert(input_file: Path, output: Path, max_depth: int, max_input_size: int,
            sanitize_names: bool, store: bool, force: bool):
    """Convert a JSON file into a ZIP archive."""
    output = output or Path(generate_unique_filename())
    if output.exists() and not force:
        raise click.ClickException(f"{output} already exists (use --force to overwrite)")

    try:
        options = ConversionOptions(
            max_input_bytes=max_input_size,
            max_depth=max_depth,
            sanitize_names=sanitize_names,
            compression=zipfile.ZIP_STORED if store else zipfile.ZIP_DEFLATED
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    click.echo(f"Converting {input_file} to {output}...")
    converter = JSONFileTreeConverter(options)
    result = asyncio.run(converter.convert_to_archive(input_file.read_text(encoding='utf-8')))

    if not result.success:
        _report_errors("Conversion failed", result.errors)

    output.write_bytes(result.archive)
    click.echo(f"✅ Wrote {result.entry_count} entries to {output} "
               f"({SizeCalculator.format_file_size(result.archive_size)})")


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--max-input-size', default=50 * 1024 * 1024, show_default=True,
              help='Maximum input size in bytes')
def validate(input_file: Path, max_input_size: int):
    """Check that a JSON file can be converted."""
    converter = JSONFileTreeConverter(ConversionOptions(max_input_bytes=max_input_size))
    result = converter.validate_input(input_file.read_text(encoding='utf-8'))

    for warning in result.warnings:
        click.echo(f"⚠️  {warning}")
    if not result.is_valid:
        _report_errors("Validation failed",
                       [f"{e.type.value}: {e.message} ({e.location})" for e in result.errors])
    click.echo(f"✅ {input_file} is valid JSON")


@main.command()
@click.argument('archive_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(archive_file: Path):
    """List the entries of a ZIP archive."""
    try:
        entries = read_entries(archive_file.read_bytes())
    except ArchiveError as e:
        raise click.ClickException(str(e))

    for entry in entries:
        if entry.is_directory:
            click.echo(entry.path)
        else:
            click.echo(f"{entry.path} ({SizeCalculator.format_file_size(len(entry.content))})")
    click.echo(f"{len(entries)} entries")


def _report_errors(heading: str, errors) -> None:
    click.echo(f"❌ {heading}:", err=True)
    for error in errors or []:
        click.echo(f"   • {error}", err=True)
    raise SystemExit(1)


if __name__ == '__main__':
    main()
