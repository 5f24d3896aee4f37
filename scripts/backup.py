"""Simple backup utility script.

Usage (from repo root):
  python -m scripts.backup --dest backups/
"""
from __future__ import annotations
from datetime import datetime
from pathlib import Path
import click
from src.lib.errors import IoFailure
from src.lib.storage import VaultStorage

@click.command()
@click.option('--dest', type=click.Path(file_okay=False, path_type=Path), default=Path('backups'), help='Destination directory for backups.')
@click.option('--vault', 'vault_path', type=click.Path(dir_okay=False, path_type=Path), default=None, help='Vault file to copy.')
def main(dest: Path, vault_path: Path | None):
	vs = VaultStorage(vault_path)
	if not vs.exists():
		click.echo(f"No vault at {vs.path}; nothing to backup.")
		raise SystemExit(1)
	stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
	try:
		target = vs.backup(dest / f"{vs.path.stem}_{stamp}{vs.path.suffix or '.dat'}")
	except IoFailure as e:
		click.echo(f"Error: {e}")
		raise SystemExit(1)
	click.echo(f"Backup written: {target}")

if __name__ == '__main__':  # pragma: no cover
	main()
