"""
Transfer Commands
-----------------

Moving entries in and out of the reading list as YAML.

Commands:
    - import: Add the entries of a YAML file, skipping collisions
    - export: Write every entry to a YAML file (or stdout with '-')
"""
import click

from rlist.core.logging_manager import handle_cli_error
from rlist.database.export_manager import ExportManager
from . import CLI_ERRORS, get_reading_list


@click.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_(ctx, file):
    """Import entries from a YAML FILE."""
    rlist = get_reading_list(ctx)
    exporter = ExportManager(rlist.logger)
    try:
        records = exporter.load_yaml(file)
        imported = rlist.import_entries(records)
    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "import", {"file": file})
        return

    skipped = len(records) - imported
    click.echo(f"Imported {imported} entries")
    if skipped:
        click.echo(f"Skipped {skipped} entries (malformed or already present)")


@click.command()
@click.argument("file", type=click.Path(dir_okay=False, allow_dash=True))
@click.pass_context
def export(ctx, file):
    """Export every entry to a YAML FILE ('-' for stdout)."""
    rlist = get_reading_list(ctx)
    exporter = ExportManager(rlist.logger)
    try:
        entries = rlist.dump_all()
        if file == "-":
            click.echo(exporter.dump_yaml(entries), nl=False)
            return
        stats = exporter.export_to_yaml(entries, file)
    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "export", {"file": file})
        return

    click.echo(f"Exported {stats['total_entries']} entries to {stats['output_path']}")
