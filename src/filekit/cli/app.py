# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import json
import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer

from ..domain.errors import FilekitError
from ..services import Filesystem
from ..services.visibility_service import VISIBILITIES

from ..logging_config import setup_logging

setup_logging()

app = typer.Typer(help="filekit CLI - directory listing, sizing, copy and delete")

logger = logging.getLogger(__name__)


def _parse_visibility(value: Optional[str]) -> Optional[str]:
    """
    Normalise a --visibility/--set value.
    Raises Typer BadParameter for anything other than public/private.
    """
    if value is None:
        return None
    label = value.strip().lower()
    if label not in VISIBILITIES:
        raise typer.BadParameter(
            f"Unknown visibility: {value}. Valid options: {', '.join(VISIBILITIES)}"
        )
    return label


def _verbose(verbose: bool) -> None:
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")


def _fail(err: FilekitError) -> NoReturn:
    typer.echo(f"Error: {err}", err=True)
    raise typer.Exit(code=1)


# ------------------------------
# CLI Commands
# ------------------------------


@app.command("ls")
def list_contents(
    path: Path = typer.Option(..., "--path", help="Directory to list"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Descend into subdirectories"),
    as_json: bool = typer.Option(False, "--json", help="Emit entries as a JSON array"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
):
    """
    List directory entries, sorted by path. A missing directory lists nothing.
    """
    _verbose(verbose)
    entries = sorted(Filesystem().list_contents(path, recursive=recursive), key=lambda e: e.path)
    if as_json:
        typer.echo(json.dumps([e.as_dict() for e in entries], ensure_ascii=False, indent=2))
        return
    for e in entries:
        if e.is_dir:
            typer.echo(f"{e.path}/")
        else:
            typer.echo(f"{e.path}\t{e.size}")


@app.command("du")
def disk_usage(
    path: Path = typer.Option(..., "--path", help="Directory to measure"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
):
    """
    Print the total size in bytes of all files under a directory.
    """
    _verbose(verbose)
    try:
        size = Filesystem().directory_size(path)
    except FilekitError as e:
        _fail(e)
    typer.echo(f"{size}\t{path}")


@app.command("stat")
def stat(
    path: Path = typer.Option(..., "--path", help="File or directory"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
):
    """
    Print metadata for one entry as JSON.
    """
    _verbose(verbose)
    try:
        entry = Filesystem().get_metadata(path)
    except FilekitError as e:
        _fail(e)
    typer.echo(json.dumps(entry.as_dict(), ensure_ascii=False, indent=2))


@app.command("rm")
def remove_tree(
    path: Path = typer.Option(..., "--path", help="Directory to delete"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
):
    """
    Delete a directory tree. Keeps going past entries it cannot remove and
    exits non-zero listing them.
    """
    _verbose(verbose)
    try:
        result = Filesystem().delete_dir(path)
    except FilekitError as e:
        _fail(e)
    if not result.ok:
        for failed, err in result.failures:
            typer.echo(f"could not remove {failed}: {err}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Deleted {path}; removed {len(result.removed)} entries")


@app.command("cp")
def copy_tree(
    src: Path = typer.Option(..., "--src", help="Source directory"),
    dst: Path = typer.Option(..., "--dst", help="Destination directory (created if missing)"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
):
    """
    Recursively copy a directory. Stops at the first failure.
    """
    _verbose(verbose)
    try:
        result = Filesystem().copy(src, dst, recursive=True)
    except FilekitError as e:
        _fail(e)
    typer.echo(f"Copied {src} to {dst}; {result.directories} directories, {result.files} files")


@app.command("mkdir")
def make_dir(
    path: Path = typer.Option(..., "--path", help="Directory to create"),
    visibility: str = typer.Option("public", "--visibility", help="public or private"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
):
    """
    Create a directory and any missing parents. Existing directories are left alone.
    """
    _verbose(verbose)
    label = _parse_visibility(visibility)
    try:
        Filesystem().create_dir(path, visibility=label)
    except FilekitError as e:
        _fail(e)
    typer.echo(f"Created {path}")


@app.command("mime")
def mime(
    path: Path = typer.Option(..., "--path", help="File to inspect"),
    guess: bool = typer.Option(True, "--guess/--no-guess", help="Fall back to the extension table"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
):
    """
    Print the content type of a file.
    """
    _verbose(verbose)
    try:
        typer.echo(Filesystem().get_mime_type(path, guess=guess))
    except FilekitError as e:
        _fail(e)


@app.command("visibility")
def visibility(
    path: Path = typer.Option(..., "--path", help="File or directory"),
    set_to: Optional[str] = typer.Option(None, "--set", help="Apply public or private"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
):
    """
    Show, or with --set change, the public/private visibility of a path.
    """
    _verbose(verbose)
    label = _parse_visibility(set_to)
    fs = Filesystem()
    try:
        if label is not None:
            fs.set_visibility(path, label)
        typer.echo(fs.get_visibility(path))
    except FilekitError as e:
        _fail(e)
