# commands.py

import click
from flask import current_app
from flask.cli import with_appcontext
from services.migration.csv_parser import parse_csv
from services.migration.row_validator import generate_preview


@click.command('migrate-members')
@click.argument('studio_id')
@click.argument('csv_file', type=click.File('r', encoding='utf-8-sig'))
@click.option('--dry-run', is_flag=True, help='Show the detected mapping and preview without importing')
@with_appcontext
def migrate_members(studio_id, csv_file, dry_run):
    """Import members into STUDIO_ID from a studio export CSV_FILE"""
    migration_service = current_app.services.get('migration')
    csv_text = csv_file.read()

    preview_result = migration_service.upload(csv_text)
    if preview_result.is_failure:
        click.echo(f'Error: {preview_result.error}', err=True)
        raise SystemExit(1)

    preview = preview_result.data
    for column in preview.columns:
        flag = ' (required)' if column.required else ''
        click.echo(f'  {column.source} -> {column.target.value}{flag}')
    click.echo(f'Rows: {preview.total_rows} total, {preview.valid_rows} valid, {preview.invalid_rows} invalid')

    if dry_run:
        rows = parse_csv(csv_text)
        full_preview = generate_preview(rows, preview.columns, sample_size=len(rows))
        for index, row in enumerate(full_preview.sample_rows, start=1):
            if not row.valid:
                click.echo(f'  Row {index}: {"; ".join(row.errors)}')
        return

    columns_payload = [column.to_dict() for column in preview.columns]
    result = migration_service.execute(studio_id, csv_text, columns_payload)
    if result.is_failure:
        click.echo(f'Error: {result.error}', err=True)
        raise SystemExit(1)

    summary = result.data
    click.echo(
        f'Import finished: {summary.created} created, {summary.skipped} skipped, '
        f'{summary.failed} failed (of {summary.total_processed})'
    )
    for error in summary.errors:
        click.echo(f'  Row {error.row} {error.email or "<no email>"}: {error.error}')


def init_app(app):
    """Register commands with the Flask app"""
    app.cli.add_command(migrate_members)
