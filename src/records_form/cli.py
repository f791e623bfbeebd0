"""CLI for rendering request forms."""

import logging
from pathlib import Path

import click
import yaml

from records_form.config import load_settings
from records_form.generator import DocumentRenderError, generate_pdf
from records_form.models import Officials, RequestRecord

REQUEST_DIR = Path(__file__).parent.parent.parent / "config" / "requests"
DEFAULT_OUTPUT_DIR = Path(__file__).parent.parent.parent / "output"

output_dir_option = click.option(
    "-o", "--output-dir",
    type=click.Path(path_type=Path),
    default=DEFAULT_OUTPUT_DIR,
    help="Output directory for generated PDFs",
)
registrar_option = click.option("--registrar", default="", help="Registrar name for the signature line")
director_option = click.option("--director", default="", help="Director name for the signature line")
settings_option = click.option(
    "--settings", "settings_file",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="YAML file with school, asset and page settings",
)


def _load_request(request_file: Path) -> RequestRecord:
    with open(request_file, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return RequestRecord(**data)


def _write(record: RequestRecord, officials: Officials, settings, output_dir: Path) -> Path:
    try:
        content = generate_pdf(record, officials, settings=settings)
    except DocumentRenderError as exc:
        raise click.ClickException(f"{record.id}: {exc}") from exc
    output_path = output_dir / record.download_filename
    output_path.write_bytes(content)
    return output_path


@click.command()
@click.argument("request_file", type=click.Path(exists=True, path_type=Path))
@output_dir_option
@registrar_option
@director_option
@settings_option
def render_request(request_file: Path, output_dir: Path, registrar: str, director: str, settings_file: Path | None):
    """Render the form for a single YAML request file."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    output_dir.mkdir(parents=True, exist_ok=True)

    settings = load_settings(settings_file)
    officials = Officials.with_fallback(registrar, director)
    output_path = _write(_load_request(request_file), officials, settings, output_dir)
    click.echo(f"Generated: {output_path}")


@click.command()
@click.argument("request_dir", type=click.Path(exists=True, file_okay=False, path_type=Path), default=REQUEST_DIR)
@output_dir_option
@registrar_option
@director_option
@settings_option
def render_all(request_dir: Path, output_dir: Path, registrar: str, director: str, settings_file: Path | None):
    """Render every YAML request file in a directory."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    output_dir.mkdir(parents=True, exist_ok=True)

    request_files = sorted(request_dir.glob("*.yaml"))
    if not request_files:
        click.echo(f"No request files found in {request_dir}")
        return

    settings = load_settings(settings_file)
    officials = Officials.with_fallback(registrar, director)
    for request_file in request_files:
        click.echo(f"Processing: {request_file.name}")
        output_path = _write(_load_request(request_file), officials, settings, output_dir)
        click.echo(f"  -> {output_path}")

    click.echo(f"\nGenerated {len(request_files)} PDFs in {output_dir}")


if __name__ == "__main__":
    render_all()
