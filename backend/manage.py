from wms import create_app
from wms.extensions import gateways
from wms.gateway import GatewayError
from wms.listing import ListView
from wms.models import ENTITIES
from wms.reports import REPORTS, build_report, load_report_data
from wms_utils.export import export_rows
from wms_utils.validity import utcnow
from flask.cli import with_appcontext
import click

app = create_app()

@app.cli.command("check-api")
@with_appcontext
def check_api():
    """Fetches every collection once and prints its size"""
    failed = False
    for endpoint in ENTITIES:
        try:
            count = len(gateways[endpoint].list())
        except GatewayError as e:
            failed = True
            click.secho(f"{endpoint:<20} ERROR  {e.message}", fg="red")
            continue
        click.echo(f"{endpoint:<20} {count} records")
    if failed:
        raise click.exceptions.Exit(1)

@app.cli.command("export-report")
@click.argument("report_type", type=click.Choice(sorted(REPORTS)))
@click.argument("path", type=click.Path(dir_okay=False, writable=True))
@click.option("--worker", default=None, help="Worker ID for the worker-history report.")
@with_appcontext
def export_report(report_type, path, worker):
    """Writes a report workbook in its default order"""
    report = REPORTS[report_type]
    if report.needs_worker and not worker:
        raise click.UsageError(f"{report_type} needs --worker")

    try:
        data = load_report_data(gateways)
    except GatewayError as e:
        raise click.ClickException(e.message)

    now = utcnow()
    rows = build_report(report_type, data, now, worker_id=worker)
    view = ListView(report.list_config, rows, now=now)
    buffer = export_rows(view.filtered_sorted, report.list_config.columns, title=report.label)
    with open(path, "wb") as f:
        f.write(buffer.getvalue())
    click.echo(f"Wrote {len(rows)} rows to {path}")
