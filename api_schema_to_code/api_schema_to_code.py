import json
import logging

import click

from .pipeline import BindingGenerationError, BindingGenerator, GeneratorConfig, OutputMode

logger = logging.getLogger(__name__)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--language", "-l", default="java", type=click.Choice(["java"]))
@click.option("--force", "-f", is_flag=True, default=False, help="Overwrite existing output files")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every resolution step")
@click.argument("schema", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output_dir", type=click.Path(file_okay=False, resolve_path=True))
def api_schema_to_code(config, language, force, verbose, schema, output_dir):
    """Generate LANGUAGE bindings for the API described in SCHEMA into OUTPUT_DIR."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    with open(schema) as f:
        api = json.load(f)

    try:
        if config is not None:
            with open(config) as f:
                config = GeneratorConfig.from_dict(json.load(f))
        else:
            config = GeneratorConfig()

        # CLI flag overrides config file
        if force:
            config.output.mode = OutputMode.FORCE

        written = BindingGenerator(api, config, language).write(output_dir)
    except (BindingGenerationError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e

    logger.info("Wrote %d file(s) to %s", len(written), output_dir)
    click.echo(f"Generated {len(written)} file(s) in {output_dir}")
