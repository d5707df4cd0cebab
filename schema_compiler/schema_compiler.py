import json
import logging

import click

from .cli_utils import reconstruct_command_line
from .compiler import SchemaCompiler
from .config import CompilerConfig


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log compilation steps and generated lines")
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def schema_compiler(config, verbose, path, output):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(name)s: %(message)s")

    with open(path) as f:
        schema = json.load(f)

    if config is not None:
        with open(config) as f:
            config = CompilerConfig.from_dict(json.load(f))
    else:
        config = CompilerConfig()

    lines = SchemaCompiler(config).compile_schema(schema)
    if config.add_generation_comment:
        lines = [f"// Generated by: {reconstruct_command_line(schema_compiler)}", "// Do not edit manually.", *lines]

    with open(output, "w") as f:
        f.write("\n".join(lines) + "\n")


if __name__ == "__main__":
    schema_compiler()
