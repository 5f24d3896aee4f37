"""CLI commands implemented with click.

Every command that opens the vault prompts for the master password and
passes it to the engine as a fresh bytearray, which the engine wipes.
"""
from __future__ import annotations
import click
from pathlib import Path
from config.settings import DEFAULT_GENERATED_LENGTH, DEFAULT_VAULT_NAME
from src.lib.crypto import generate_password, to_buffer
from src.lib.errors import InvalidArgument, IoFailure, VaultLoadError
from src.lib.log import setup_logging
from src.lib.models import PasswordEntry, Vault
from src.lib.storage import VaultStorage

def _fail(msg: str):
	click.echo(f'Error: {msg}')
	raise SystemExit(1)

def _open(vs: VaultStorage, password: str) -> Vault:
	try:
		vault = vs.load(to_buffer(password))
	except VaultLoadError:
		_fail('Failed to open vault (wrong password or corrupted file).')
	except IoFailure as e:
		_fail(f'Storage problem: {e}')
	except InvalidArgument as e:
		_fail(str(e))
	if vault is None:
		_fail(f'No vault at {vs.path}. Run `init` first.')
	return vault

def _save(vs: VaultStorage, vault: Vault, password: str):
	try:
		vs.save(vault, to_buffer(password))
	except IoFailure as e:
		_fail(f'Storage problem: {e}')
	except InvalidArgument as e:
		_fail(str(e))

def _line(e: PasswordEntry) -> str:
	return f"{e.id}: {e} [{e.category}]"

@click.group()
@click.option('--vault', 'vault_path', type=click.Path(dir_okay=False, path_type=Path), default=None,
	help='Vault file (defaults to $VAULT_PATH or ~/password-vault.dat).')
@click.pass_context
def cli(ctx, vault_path):
	"""pwvault: encrypted local password vault"""
	setup_logging()
	ctx.obj = VaultStorage(vault_path)

@cli.command()
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
@click.option('--name', default=DEFAULT_VAULT_NAME, show_default=True, help='Display name of the vault.')
@click.option('--force', is_flag=True, help='Recreate if vault already exists.')
@click.pass_obj
def init(vs, password, name, force):
	"""Create a new empty encrypted vault."""
	if vs.exists() and not force:
		_fail('Vault exists (use --force to recreate).')
	_save(vs, Vault(name=name), password)
	click.echo(f'Vault created: {vs.path}')

@cli.command()
@click.option('--password', prompt=True, hide_input=True)
@click.option('--title', prompt=True, default='')
@click.option('--username', prompt=True, default='')
@click.option('--secret', prompt=True, hide_input=True)
@click.option('--url', prompt=True, default='')
@click.option('--notes', prompt=True, default='')
@click.option('--category', prompt=True, default='')
@click.pass_obj
def add(vs, password, title, username, secret, url, notes, category):
	"""Add a credential entry."""
	vault = _open(vs, password)
	entry = PasswordEntry(title or None, username or None, to_buffer(secret), url or None, notes or None, category or None)
	vault.add_entry(entry)
	_save(vs, vault, password)
	click.echo(f'Added entry {entry.id}.')

@cli.command('list')
@click.option('--password', prompt=True, hide_input=True)
@click.option('--category', default=None, help='Only entries in this category (exact match).')
@click.pass_obj
def list_entries(vs, password, category):
	vault = _open(vs, password)
	items = vault.entries_by_category(category) if category else vault.all_entries()
	if not items:
		click.echo('No entries.')
	for e in items:
		click.echo(_line(e))

@cli.command()
@click.argument('text')
@click.option('--password', prompt=True, hide_input=True)
@click.pass_obj
def search(vs, text, password):
	"""Case-insensitive search over title, username, URL and notes."""
	vault = _open(vs, password)
	hits = vault.search(text)
	if not hits:
		click.echo('No matches.')
	for e in hits:
		click.echo(_line(e))

@cli.command()
@click.argument('entry_id')
@click.option('--password', prompt=True, hide_input=True)
@click.pass_obj
def show(vs, entry_id, password):
	"""Show one entry, including its secret."""
	vault = _open(vs, password)
	e = vault.get_entry(entry_id)
	if e is None:
		_fail('Not found')
	click.echo(f"ID: {e.id}\nTitle: {e.display_name}\nUsername: {e.username or ''}\nSecret: {e.secret.decode('utf-8', 'replace')}\nURL: {e.url or ''}\nCategory: {e.category}\nCreated: {e.created_at_formatted}\nUpdated: {e.updated_at_formatted}\n---\n{e.notes or ''}")

@cli.command()
@click.argument('entry_id')
@click.option('--password', prompt=True, hide_input=True)
@click.pass_obj
def remove(vs, entry_id, password):
	vault = _open(vs, password)
	if not vault.remove_entry(entry_id):
		_fail('Not found')
	_save(vs, vault, password)
	click.echo(f'Removed entry {entry_id}.')

@cli.command()
@click.option('--password', prompt=True, hide_input=True)
@click.pass_obj
def categories(vs, password):
	vault = _open(vs, password)
	for c in vault.categories():
		click.echo(c)

@cli.command()
@click.argument('name')
@click.option('--password', prompt=True, hide_input=True)
@click.pass_obj
def rename(vs, name, password):
	"""Change the vault's display name."""
	vault = _open(vs, password)
	vault.name = name
	_save(vs, vault, password)
	click.echo(f'Vault renamed to {name}.')

@cli.command()
@click.confirmation_option(prompt='Delete the vault file permanently?')
@click.pass_obj
def delete(vs):
	try:
		vs.delete()
	except IoFailure as e:
		_fail(f'Storage problem: {e}')
	click.echo('Vault deleted.')

@cli.command()
@click.option('--dest', type=click.Path(dir_okay=False, path_type=Path), default=None, help='Backup file path.')
@click.pass_obj
def backup(vs, dest):
	"""Copy the encrypted vault file."""
	try:
		target = vs.backup(dest)
	except IoFailure as e:
		_fail(str(e))
	click.echo(f'Backup written: {target}')

@cli.command()
@click.option('--length', default=DEFAULT_GENERATED_LENGTH, show_default=True, type=int)
@click.option('--no-symbols', is_flag=True, help='Letters and digits only.')
def generate(length, no_symbols):
	"""Print a random password."""
	try:
		click.echo(generate_password(length, symbols=not no_symbols))
	except InvalidArgument as e:
		_fail(str(e))
