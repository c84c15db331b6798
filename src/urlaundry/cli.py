"""Click CLI with commands: clean, check, domains."""

from __future__ import annotations

import json

import click
import structlog

from urlaundry.logging import setup_logging
from urlaundry.policies import DOMAIN_POLICIES, match_domain
from urlaundry.settings import Settings
from urlaundry.urls import clean_url, count_removed_params, is_valid_url


@click.group()
@click.option("--log-dir", default=None, help="Directory for JSON log files (overrides URLAUNDRY_LOG_DIR).")
@click.pass_context
def cli(ctx: click.Context, log_dir: str | None) -> None:
    """URLaundry: strip tracking parameters from URLs."""
    ctx.ensure_object(dict)
    settings = Settings()
    if log_dir:
        settings = settings.model_copy(update={"log_dir": log_dir})
    ctx.obj["settings"] = settings


def _get_log(ctx: click.Context) -> structlog.stdlib.BoundLogger:
    settings: Settings = ctx.obj["settings"]
    return setup_logging(settings.log_dir, settings.log_name)


@cli.command()
@click.argument("url", required=False)
@click.option("--json", "as_json", is_flag=True, help="Print the result as a JSON object.")
@click.option("-v", "--verbose", is_flag=True, help="Also print kept parameters and the removed count.")
@click.pass_context
def clean(ctx: click.Context, url: str | None, as_json: bool, verbose: bool) -> None:
    """Clean a single URL. Reads one line from stdin when URL is omitted."""
    log = _get_log(ctx)

    if url is None:
        url = click.get_text_stream("stdin").readline()
    raw = url.strip()
    if not raw:
        click.echo("No URL given.", err=True)
        raise SystemExit(1)

    result = clean_url(raw)
    removed = count_removed_params(raw, result)

    if is_valid_url(raw):
        log.debug("clean.done", url=result.url, kept=list(result.preserved_params), removed=removed)
    else:
        # Echoed back unchanged, not an error
        log.warning("clean.unparseable", url=raw)

    if as_json:
        payload = {"url": result.url, "preserved_params": list(result.preserved_params), "removed": removed}
        click.echo(json.dumps(payload))
        return

    click.echo(result.url)
    if verbose:
        click.echo(f"Kept:    {', '.join(result.preserved_params) or '-'}")
        click.echo(f"Removed {removed} param{'' if removed == 1 else 's'}")


@cli.command()
@click.argument("url")
@click.pass_context
def check(ctx: click.Context, url: str) -> None:
    """Exit 0 if URL is an absolute URL with a host, 1 otherwise."""
    log = _get_log(ctx)
    valid = is_valid_url(url)
    log.debug("check.done", url=url, valid=valid)

    if not valid:
        click.echo("invalid")
        raise SystemExit(1)
    click.echo("valid")


@cli.command()
@click.option("--domain", "hostname", default=None, help="Show which policy applies to this hostname.")
def domains(hostname: str | None) -> None:
    """List the domain policy table, or resolve one hostname against it."""
    if hostname:
        policy = match_domain(hostname.strip().lower())
        if policy is None:
            click.echo(f"{hostname}: no policy")
            return
        domain, params = policy
        click.echo(f"{hostname} -> {domain}: {', '.join(params)}")
        return

    for domain, params in DOMAIN_POLICIES:
        click.echo(f"{domain}: {', '.join(params)}")
