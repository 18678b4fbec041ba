import asyncio
import json
import logging
import os

import click
from pydantic import ValidationError

from . import __version__
from .config import ConfigManager
from .exceptions import BitdefenderError, ParseIntegrityError
from .markdown import render_markdown_table
from .models import PluginOutput, PluginResults
from .scanner import BitdefenderScanner
from .storage import ElasticsearchStore
from .utils import scan_id
from .webhook import post_results

logger = logging.getLogger(__name__)


def _setup_logging(level: str, verbose: bool) -> None:
    """Setup logging configuration; logs go to stderr so stdout stays JSON"""
    log_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def _make_scanner(config_manager: ConfigManager) -> BitdefenderScanner:
    return BitdefenderScanner(
        config_manager.tool_manager(),
        config_manager.signature_stamp(),
    )


class AliasedGroup(click.Group):
    """Group that also resolves short command aliases (e.g. `u` for `update`)."""

    aliases = {'u': 'update'}

    def get_command(self, ctx, cmd_name):
        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))

    def resolve_command(self, ctx, args):
        _, cmd, args = super().resolve_command(ctx, args)
        return (cmd.name if cmd else None), cmd, args


@click.group(cls=AliasedGroup)
@click.option('--config', '-c', 'config_path', default=None, help='Configuration file path')
@click.option('--verbose', '-V', is_flag=True, help='Verbose output')
@click.version_option(__version__, prog_name='bitdefender')
@click.pass_context
def cli(ctx, config_path, verbose):
    """Malice Bitdefender AntiVirus Plugin"""
    ctx.ensure_object(dict)
    try:
        config_manager = ConfigManager(config_path)
    except FileNotFoundError as e:
        raise click.BadParameter(str(e), param_hint="'--config'")
    except ValidationError as e:
        raise click.ClickException(f"Invalid plugin configuration: {e}")
    _setup_logging(config_manager.get_config().log_level, verbose)
    ctx.obj['config_manager'] = config_manager


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--table', '-t', is_flag=True, help='Output as Markdown table')
@click.option('--callback', '-C', is_flag=True, help='POST results to Malice webhook (MALICE_ENDPOINT)')
@click.option('--proxy', '-x', is_flag=True, help='Use MALICE_PROXY for the webhook request')
@click.option('--elasticsearch', default=None, help='Elasticsearch url for Malice to store results')
@click.option('--timeout', type=int, default=None, help='Malice plugin timeout (in seconds)')
@click.pass_context
def scan(ctx, path, table, callback, proxy, elasticsearch, timeout):
    """Scan a file with Bitdefender"""
    config_manager = ctx.obj['config_manager']
    config = config_manager.update_config(
        {'elasticsearch_url': elasticsearch, 'timeout': timeout}
    )
    path = os.path.abspath(path)
    scanner = _make_scanner(config_manager)

    async def run_scan():
        result = await scanner.run(path, config.timeout)
        result = result.with_markdown(render_markdown_table(result))
        doc_id = scan_id(path, config.scanid)

        if config.elasticsearch_url:
            store = ElasticsearchStore(config.elasticsearch_url, config.elasticsearch_index)
            await store.init()
            await store.store_plugin_results(PluginResults.from_scan(doc_id, result))

        if table:
            click.echo(result.markdown)
            return

        payload = PluginOutput(bitdefender=result.without_markdown()).to_dict()
        if callback:
            status = await post_results(
                config.endpoint,
                payload,
                doc_id,
                proxy=config.proxy if proxy else None,
            )
            click.echo(status)
            return

        click.echo(json.dumps(payload))

    try:
        asyncio.run(run_scan())
    except ParseIntegrityError as e:
        click.echo(f"[ERROR] {e}", err=True)
        ctx.exit(2)
    except BitdefenderError as e:
        logger.error(f"bitdefender scan of {path} failed: {e}")
        raise click.ClickException(str(e))


@cli.command()
@click.option('--timeout', type=int, default=None, help='Update timeout (in seconds)')
@click.pass_context
def update(ctx, timeout):
    """Update virus definitions (alias: u)"""
    config_manager = ctx.obj['config_manager']
    config = config_manager.update_config({'timeout': timeout})
    scanner = _make_scanner(config_manager)

    click.echo("Updating Bitdefender...")
    try:
        stamp = asyncio.run(scanner.update_signatures(config.timeout))
    except BitdefenderError as e:
        logger.error(f"bitdefender update failed: {e}")
        raise click.ClickException(str(e))
    click.echo(f"Signatures updated: {stamp}")


@cli.command()
@click.option('--port', '-p', type=int, default=None, help='Port to listen on')
@click.pass_context
def web(ctx, port):
    """Create a Bitdefender scan web service"""
    from .web import serve

    config_manager = ctx.obj['config_manager']
    config = config_manager.update_config({'port': port})
    scanner = _make_scanner(config_manager)
    if not scanner.is_available():
        logger.warning("bdscan not found; scans will fail until it is installed")
    serve(config, scanner)


if __name__ == '__main__':
    cli()
