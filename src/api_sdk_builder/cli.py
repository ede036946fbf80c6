"""CLI entry point for api-sdk-builder."""

import logging
from fnmatch import fnmatchcase
from pathlib import Path

import click

from api_sdk_builder.generator.base import UnsupportedLanguageError
from api_sdk_builder.generator.config import SDKConfig
from api_sdk_builder.generator.sdk import LANGUAGES, generate_sdk, get_generator, get_template
from api_sdk_builder.generator.validator import validate_files
from api_sdk_builder.parser.base import EndpointDescriptor
from api_sdk_builder.parser.detect import detect_format
from api_sdk_builder.parser.postman import parse_postman
from api_sdk_builder.parser.swagger import parse_base_url, parse_openapi
from api_sdk_builder.writer import archive_name, archive_root, build_archive, bundle_files, write_sdk


def _parse_doc(file_path: Path, fmt: str, model: str | None = None) -> list[EndpointDescriptor]:
    """Parse API document based on format."""
    if fmt == "auto":
        fmt = detect_format(file_path)

    if fmt == "swagger":
        return parse_openapi(file_path)
    elif fmt == "postman":
        return parse_postman(file_path)
    else:
        from api_sdk_builder.parser.markdown import parse_markdown
        return parse_markdown(file_path, model=model)


def _filter_endpoints(endpoints: list[EndpointDescriptor], patterns: tuple[str, ...]) -> list[EndpointDescriptor]:
    """Keep endpoints matching any pattern.

    A pattern is a path glob ("/users/*") or a method plus glob ("GET /users/*").
    """
    if not patterns:
        return list(endpoints)

    def matches(ep: EndpointDescriptor, pattern: str) -> bool:
        parts = pattern.split(None, 1)
        if len(parts) == 2:
            return ep.method.upper() == parts[0].upper() and fnmatchcase(ep.path, parts[1])
        return fnmatchcase(ep.path, pattern)

    return [ep for ep in endpoints if any(matches(ep, p) for p in patterns)]


@click.group(context_settings={"auto_envvar_prefix": "SDK_BUILDER"})
@click.option("-v", "--verbose", is_flag=True, help="Log generation details.")
def main(verbose: bool):
    """API SDK Builder: generate client SDKs from API docs."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output directory for generated SDKs.")
@click.option("-l", "--language", "languages", multiple=True, required=True, help="Target language (repeatable).")
@click.option("--package-name", required=True, help="Package name of the generated SDK.")
@click.option("--version", "version", default="1.0.0", show_default=True, help="Package version.")
@click.option("--author", default=None, help="Package author.")
@click.option("--description", default=None, help="Package description.")
@click.option("--base-url", default=None, help="API base URL; read from the document when omitted.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "swagger", "postman", "markdown"]), help="Document format.")
@click.option("--model", default=None, help="LLM model for Markdown documents.")
@click.option("--endpoint", "patterns", multiple=True, help='Only include matching endpoints, e.g. "/users/*" or "GET /users/{id}".')
@click.option("--append", is_flag=True, help="Keep files that already exist in the output directory.")
@click.option("--zip", "as_zip", is_flag=True, help="Write one zip archive per language.")
@click.option("--check", is_flag=True, help="Syntax-check generated Python and JSON files.")
def generate(
    doc_path: Path,
    output: Path,
    languages: tuple[str, ...],
    package_name: str,
    version: str,
    author: str | None,
    description: str | None,
    base_url: str | None,
    fmt: str,
    model: str | None,
    patterns: tuple[str, ...],
    append: bool,
    as_zip: bool,
    check: bool,
):
    """Generate SDKs from API documentation."""
    for language in languages:
        try:
            get_generator(language)
        except UnsupportedLanguageError as e:
            raise click.ClickException(str(e)) from e

    click.echo(f"Parsing {doc_path} (format: {fmt})...")
    endpoints = _parse_doc(doc_path, fmt, model)
    click.echo(f"Found {len(endpoints)} endpoints.")

    if patterns:
        endpoints = _filter_endpoints(endpoints, patterns)
        click.echo(f"Selected {len(endpoints)} endpoints.")

    if base_url is None and (fmt == "swagger" or (fmt == "auto" and detect_format(doc_path) == "swagger")):
        base_url = parse_base_url(doc_path)
    if not base_url:
        raise click.UsageError("No base URL found in the document; pass --base-url.")

    output.mkdir(parents=True, exist_ok=True)
    for language in languages:
        config = SDKConfig(
            language=language,
            package_name=package_name,
            version=version,
            base_url=base_url,
            author=author,
            description=description,
        )
        sdk = generate_sdk(endpoints, config)

        if check:
            errors = validate_files(bundle_files(sdk))
            if errors:
                details = "\n".join(f"  {name}: {error}" for name, error in errors.items())
                raise click.ClickException(f"Generated {sdk.language} SDK has errors:\n{details}")

        if as_zip:
            archive_path = output / f"{Path(archive_name(config)).stem}-{sdk.language}.zip"
            archive_path.write_bytes(build_archive(sdk, root=archive_root(package_name)))
            click.echo(f"  Created {archive_path}")
        else:
            target = output / sdk.language
            written = write_sdk(sdk, target, skip_existing=append)
            click.echo(f"  {sdk.language}: {len(written)} files in {target}")

    click.echo(f"Done! Generated {len(languages)} SDKs in {output}")


@main.command(name="languages")
def list_languages():
    """List supported target languages."""
    for language in LANGUAGES:
        tpl = get_template(language)
        click.echo(f"{tpl.language:<12} {tpl.display_name:<12} {tpl.manifest_file}")


@main.command()
@click.argument("language")
@click.option("--package-name", default="example", show_default=True, help="Package name used in the snippets.")
def template(language: str, package_name: str):
    """Show install and usage snippets for LANGUAGE."""
    try:
        tpl = get_template(language, package_name)
    except UnsupportedLanguageError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"{tpl.display_name} ({tpl.manifest_file}, client in {tpl.client_file})")
    click.echo("")
    click.echo("Install:")
    click.echo(tpl.install)
    click.echo("")
    click.echo("Usage:")
    click.echo(tpl.usage)
