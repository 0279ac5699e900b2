"""
CLI entry point: testnet-bot order | validate | logs | health.

Every command loads config from --config (default config.yaml). Orders go
through the validator and the execution simulator; every step is appended
to the order journal.
"""

import json
import logging
import random
import sys

import click
from dotenv import load_dotenv

from config import AppConfig, ConfigError, load_config

load_dotenv()

EXIT_PRECONDITION = 1
EXIT_REJECTED = 2


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s  %(message)s",
        stream=sys.stderr,
    )


def _load(ctx: click.Context) -> AppConfig:
    try:
        return load_config(ctx.obj["config_path"])
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _build_pipeline(cfg: AppConfig, *, symbol: str | None, ref_price: float | None, seed: int | None):
    from cli.structured_log import StreamLogSink
    from execution import ExecutionSimulator, StaticPricingContext, UniformSlippage
    from journal import FanOutLogSink, JsonlLogSink
    from order_core.pipeline import OrderPipeline

    pricing = StaticPricingContext(cfg.pricing.reference_prices)
    if ref_price is not None and isinstance(symbol, str) and symbol:
        pricing = pricing.with_price(symbol, ref_price)

    if seed is None:
        seed = cfg.simulator.seed
    rng = random.Random(seed)
    slippage = UniformSlippage(rng, low=cfg.simulator.slippage_low, high=cfg.simulator.slippage_high)
    simulator = ExecutionSimulator(pricing, rng=rng, slippage=slippage)

    sinks = [JsonlLogSink(cfg.journal.path, echo_stdout=cfg.journal.echo_stdout)]
    if cfg.alerting.structured_logs or cfg.alerting.webhook_url:
        sinks.append(
            StreamLogSink(
                venue=cfg.venue.name,
                enabled=cfg.alerting.structured_logs,
                webhook_url=cfg.alerting.webhook_url,
            )
        )
    return OrderPipeline(simulator, FanOutLogSink(sinks))


def _order_options(fn):
    fn = click.option("--price", default=None, help="Limit price (LIMIT orders only).")(fn)
    fn = click.option("--quantity", "--qty", "quantity", default=None, help="Order quantity, e.g. 0.01.")(fn)
    fn = click.option("--type", "order_type", default="MARKET", show_default=True, help="MARKET or LIMIT.")(fn)
    fn = click.option("--side", default=None, help="BUY or SELL.")(fn)
    fn = click.option("--symbol", default=None, help="Futures symbol, uppercase letters only (e.g. BTCUSDT).")(fn)
    return fn


@click.group()
@click.option("--config", "config_path", default="config.yaml", help="Path to config file.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Mirror pipeline events to stderr logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: str, verbose: bool) -> None:
    """testnet-bot: validate and simulate futures testnet orders."""
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


# ---------- testnet-bot order ----------


@cli.command()
@_order_options
@click.option("--ref-price", default=None, type=float, help="Reference price for this symbol (overrides config).")
@click.option("--seed", default=None, type=int, help="Seed for slippage and order ids (reproducible fills).")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the raw response as JSON.")
@click.pass_context
def order(
    ctx: click.Context,
    symbol: str | None,
    side: str | None,
    order_type: str | None,
    quantity: str | None,
    price: str | None,
    ref_price: float | None,
    seed: int | None,
    as_json: bool,
) -> None:
    """Validate an order and simulate its execution on the testnet.

    MARKET orders fill at the configured reference price with +/-0.2%
    slippage. LIMIT orders rest as NEW with nothing executed.

    Exit code 0 = placed, 2 = rejected by validation, 1 = precondition failure
    (no reference price, order ids exhausted).
    """
    cfg = _load(ctx)
    from cli.output import format_execution_result, format_validation_errors
    from execution import PreconditionError
    from order_core import RawOrderRequest

    pipeline = _build_pipeline(cfg, symbol=symbol, ref_price=ref_price, seed=seed)
    raw = RawOrderRequest(symbol=symbol, side=side, order_type=order_type, quantity=quantity, price=price)

    if not as_json:
        click.echo(f"Placing {order_type} {side} order on {cfg.venue.name}: symbol={symbol}, qty={quantity}"
                   + (f", price={price}" if price is not None and order_type == "LIMIT" else ""))

    try:
        result = pipeline.submit(raw)
    except PreconditionError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(EXIT_PRECONDITION)

    if not result.ok:
        if as_json:
            click.echo(json.dumps({"errors": result.errors}, indent=2))
        else:
            click.echo(format_validation_errors(result.errors))
        raise SystemExit(EXIT_REJECTED)

    if as_json:
        click.echo(json.dumps(result.execution.to_dict(), indent=2))
    else:
        click.echo(format_execution_result(result.execution))


# ---------- testnet-bot validate ----------


@cli.command()
@_order_options
@click.pass_context
def validate(
    ctx: click.Context,
    symbol: str | None,
    side: str | None,
    order_type: str | None,
    quantity: str | None,
    price: str | None,
) -> None:
    """Check an order against the venue's constraints without executing it."""
    cfg = _load(ctx)
    from cli.output import format_order_summary, format_validation_errors
    from order_core import RawOrderRequest

    pipeline = _build_pipeline(cfg, symbol=symbol, ref_price=None, seed=None)
    result = pipeline.validate(
        RawOrderRequest(symbol=symbol, side=side, order_type=order_type, quantity=quantity, price=price)
    )
    if not result.ok:
        click.echo(format_validation_errors(result.errors))
        raise SystemExit(EXIT_REJECTED)
    click.echo(format_order_summary(result.order))
    click.echo("\nOrder is valid.")


# ---------- testnet-bot logs ----------


@cli.command()
@click.option("--level", default=None, type=click.Choice(["INFO", "WARN", "ERROR"]), help="Only show this level.")
@click.option("--last", "last_n", default=20, show_default=True, help="Number of most recent entries to show.")
@click.pass_context
def logs(ctx: click.Context, level: str | None, last_n: int) -> None:
    """Show recent entries from the order journal."""
    cfg = _load(ctx)
    from cli.output import format_log_entry
    from journal import read_journal
    from order_core import LogLevel

    entries = read_journal(cfg.journal.path, level=LogLevel(level) if level else None, last=last_n)
    if not entries:
        click.echo("No log entries.")
        return
    for entry in entries:
        click.echo(format_log_entry(entry))


# ---------- testnet-bot health ----------


@cli.command()
@click.pass_context
def health(ctx: click.Context) -> None:
    """Check system health: config, pricing context, journal access.

    Exit code 0 = healthy, 1 = unhealthy.
    """
    checks: list[tuple[str, bool, str]] = []

    try:
        cfg = load_config(ctx.obj["config_path"])
        mode = "testnet" if cfg.venue.testnet else "NOT testnet"
        checks.append(("config", True, f"loaded ({cfg.venue.name}, {mode})"))
    except ConfigError as e:
        checks.append(("config", False, str(e)))
        _print_health(checks)
        raise SystemExit(1)

    checks.append(("venue", cfg.venue.testnet, cfg.venue.base_url))

    n_prices = len(cfg.pricing.reference_prices)
    if n_prices:
        symbols = ", ".join(sorted(cfg.pricing.reference_prices))
        checks.append(("pricing", True, f"{n_prices} reference prices ({symbols})"))
    else:
        checks.append(("pricing", False, "no reference prices; MARKET orders will fail"))

    try:
        from journal import JsonlLogSink
        sink = JsonlLogSink(cfg.journal.path)
        with open(sink.path, "a"):
            pass
        checks.append(("journal", True, str(sink.path)))
    except OSError as e:
        checks.append(("journal", False, str(e)))

    creds = "present" if cfg.venue.has_credentials else "not set (simulation only)"
    checks.append(("credentials", True, creds))

    _print_health(checks)
    healthy = all(ok for _, ok, _ in checks)
    raise SystemExit(0 if healthy else 1)


def _print_health(checks: list[tuple[str, bool, str]]) -> None:
    for name, ok, detail in checks:
        status = "OK" if ok else "FAIL"
        click.echo(f"  [{status}] {name}: {detail}")
    healthy = all(ok for _, ok, _ in checks)
    click.echo(f"\nHealth: {'HEALTHY' if healthy else 'UNHEALTHY'}")


if __name__ == "__main__":
    cli()
