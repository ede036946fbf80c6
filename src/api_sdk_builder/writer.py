"""Lays a generated SDK out on disk or packs it into a zip archive."""

import io
import json
import logging
import re
import zipfile
from pathlib import Path

from api_sdk_builder.generator.config import GeneratedSDK, SDKConfig

logger = logging.getLogger(__name__)

# Fixed timestamp so identical bundles give identical archives
ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)


def _render_setup_py(kwargs: dict) -> str:
    lines = ["from setuptools import setup", "", "setup("]
    for key, value in kwargs.items():
        lines.append(f"    {key}={value!r},")
    lines.extend([")", ""])
    return "\n".join(lines)


def manifest_file(sdk: GeneratedSDK) -> tuple[str, str]:
    """Return (filename, text) for the SDK's package manifest."""
    config = sdk.package_config
    if isinstance(config, str):
        text = config
    elif sdk.manifest_name.endswith(".py"):
        text = _render_setup_py(config)
    else:
        text = json.dumps(config, indent=2) + "\n"
    return sdk.manifest_name, text


def bundle_files(sdk: GeneratedSDK) -> dict[str, str]:
    """Every file of the SDK keyed by relative path, manifest and docs included."""
    files = dict(sdk.files)
    name, text = manifest_file(sdk)
    files[name] = text
    files["README.md"] = sdk.readme
    files["EXAMPLES.md"] = sdk.examples
    return files


def write_sdk(sdk: GeneratedSDK, output_dir: Path, skip_existing: bool = False) -> list[Path]:
    """Write the bundle under output_dir and return the paths written.

    With skip_existing, files already on disk are left untouched.
    """
    written = []
    for relative, content in bundle_files(sdk).items():
        file_path = output_dir / relative
        if skip_existing and file_path.exists():
            logger.debug("Skipping existing %s", file_path)
            continue
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        written.append(file_path)
    logger.debug("Wrote %d files to %s", len(written), output_dir)
    return written


def archive_root(package_name: str) -> str:
    """Directory name for a package inside an archive."""
    return re.sub(r"[^A-Za-z0-9._-]+", "-", package_name).strip("-.") or "sdk"


def archive_name(config: SDKConfig) -> str:
    return f"{archive_root(config.package_name)}-v{config.version}.zip"


def build_archive(sdk: GeneratedSDK, root: str | None = None) -> bytes:
    """Zip the bundle; entries live under root/ when given."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for relative, content in bundle_files(sdk).items():
            entry = f"{root}/{relative}" if root else relative
            info = zipfile.ZipInfo(entry, date_time=ZIP_DATE_TIME)
            info.compress_type = zipfile.ZIP_DEFLATED
            info.external_attr = 0o644 << 16
            archive.writestr(info, content.encode("utf-8"))
    return buffer.getvalue()
