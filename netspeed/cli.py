import logging
import signal
import threading
import time

import click

from netspeed.data.network_speed import DisplayMode
from netspeed.monitor import Monitor
from netspeed.util import log, system, wtime
from netspeed.util.config import ConfigStore
from netspeed.util.formatter import SpeedFormatter

context_settings = dict(help_option_names=["-h", "--help"])
pidfile_name = "netspeed-monitor"

logger = logging.getLogger("netspeed")


def configure_logging(debug: bool = False):
    log.configure(
        debug=debug,
        name="netspeed",
        logfile=system.get_cache_directory() / "netspeed.log",
    )


def show_reading(monitor: Monitor, mode: DisplayMode, timestamp: bool):
    reading = monitor.tick(mode)
    if not reading.success:
        click.echo(f"Error reading network stats: {reading.error}", err=True)

    line = reading.text
    if timestamp:
        line = f"[{wtime.get_clock_timestamp()}] {line}"
    click.echo(line)


def run_loop(monitor: Monitor, mode: DisplayMode, interval: int, timestamp: bool):
    stopping = threading.Event()
    wake = threading.Event()
    reset_pending = threading.Event()

    def stop_handler(signum: int, _frame: object | None):
        logger.info(f"received {signal.Signals(signum).name} - stopping")
        stopping.set()
        wake.set()

    def reset_handler(_signum: int, _frame: object | None):
        logger.info("received SIGUSR2 - resetting the total download counter")
        reset_pending.set()
        wake.set()

    previous_handlers = {
        signum: signal.signal(signum, handler)
        for signum, handler in (
            (signal.SIGINT, stop_handler),
            (signal.SIGTERM, stop_handler),
            (signal.SIGUSR2, reset_handler),
        )
    }

    system.write_pidfile(pidfile_name)
    try:
        show_reading(monitor, mode, timestamp)
        while not stopping.is_set():
            wake.wait(interval)
            wake.clear()
            if stopping.is_set():
                break

            if reset_pending.is_set():
                reset_pending.clear()
                try:
                    monitor.reset_total()
                except OSError as e:
                    logger.error(f"failed to reset total: {e}")

            show_reading(monitor, mode, timestamp)
    finally:
        system.remove_pidfile(pidfile_name)
        for signum, handler in previous_handlers.items():
            signal.signal(signum, handler)

    click.echo("\nMonitoring stopped.")


@click.group(
    invoke_without_command=True,
    context_settings=context_settings,
    help="Network speed monitor for panels and terminals",
)
@click.option("-d", "--debug", default=False, is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool):
    configure_logging(debug=debug)
    if ctx.invoked_subcommand is None:
        ctx.invoke(monitor)


@cli.command(help="Start continuous network speed monitoring")
@click.option(
    "-m", "--mode", type=click.IntRange(0, 4), default=None, help="Display mode (0-4)"
)
@click.option(
    "-i",
    "--interval",
    type=click.IntRange(1, 60),
    default=None,
    help="Refresh interval in seconds",
)
@click.option(
    "-o", "--once", default=False, is_flag=True, help="Show speed once and exit"
)
@click.option(
    "--timestamp/--no-timestamp",
    default=True,
    help="Prefix each line with the time of day",
)
def monitor(mode: int | None, interval: int | None, once: bool, timestamp: bool):
    store = ConfigStore()
    speed_monitor = Monitor(store)
    display_mode = DisplayMode(mode) if mode is not None else store.mode
    interval = interval or store.refresh_interval

    if once:
        # The first sample only sets the baseline
        if display_mode != DisplayMode.TOTAL_DOWNLOADED:
            speed_monitor.tick(display_mode)
            time.sleep(1)
        show_reading(speed_monitor, display_mode, timestamp)
        return

    click.echo("Starting network speed monitoring...")
    click.echo(f"Mode: {SpeedFormatter.describe(display_mode)}")
    click.echo(f"Refresh interval: {interval} seconds")
    click.echo("Press Ctrl+C to stop\n")

    logger.info(f"monitoring in mode {display_mode.name} every {interval}s")
    run_loop(speed_monitor, display_mode, interval, timestamp)


@cli.command(help="Stop monitoring (if running)")
def stop():
    pids = system.signal_monitors(signal.SIGTERM, name=pidfile_name)
    if not pids:
        click.echo("Monitoring is not running.")
        return
    for pid in pids:
        click.echo(f"Stopped monitoring with PID {pid}")


@cli.command(help="List all available display modes")
def modes():
    store = ConfigStore()
    click.echo("Available display modes:")
    for mode in SpeedFormatter.all_modes():
        current = " (current)" if mode == store.mode else ""
        click.echo(f"  {int(mode)}: {SpeedFormatter.describe(mode)}{current}")


def report_save_failure(store: ConfigStore):
    click.echo(f"Failed to save config to {store.path}", err=True)


@cli.command(name="config", help="Show or set configuration")
@click.option("-s", "--show", default=False, is_flag=True, help="Show current configuration")
@click.option("-m", "--mode", type=int, default=None, help="Set display mode (0-4)")
@click.option("-f", "--font-mode", type=int, default=None, help="Set font mode (0-4)")
@click.option(
    "-i", "--interval", type=int, default=None, help="Set refresh interval (1-60)"
)
@click.option(
    "-r", "--reset", default=False, is_flag=True, help="Restore the default configuration"
)
@click.pass_context
def config_command(
    ctx: click.Context,
    show: bool,
    mode: int | None,
    font_mode: int | None,
    interval: int | None,
    reset: bool,
):
    store = ConfigStore()
    failed = False

    if reset:
        if store.reset_to_defaults():
            click.echo("Configuration reset to defaults.")
        else:
            report_save_failure(store)
            failed = True

    if show or (not reset and mode is None and font_mode is None and interval is None):
        config = store.config
        click.echo("Current configuration:")
        click.echo(f"  Mode: {int(config.mode)} ({SpeedFormatter.describe(config.mode)})")
        click.echo(f"  Font Mode: {config.font_mode}")
        click.echo(f"  Refresh Interval: {config.refresh_interval} seconds")
        click.echo(f"  Config File: {store.path}")

    if mode is not None:
        try:
            if store.set_mode(mode):
                click.echo(f"Mode set to: {mode} ({SpeedFormatter.describe(mode)})")
            else:
                report_save_failure(store)
                failed = True
        except ValueError:
            click.echo("Invalid mode. Must be 0-4.", err=True)
            failed = True

    if font_mode is not None:
        try:
            if store.set_font_mode(font_mode):
                click.echo(f"Font mode set to: {font_mode}")
            else:
                report_save_failure(store)
                failed = True
        except ValueError:
            click.echo("Invalid font mode. Must be 0-4.", err=True)
            failed = True

    if interval is not None:
        try:
            if store.set_interval(interval):
                click.echo(f"Refresh interval set to: {interval} seconds")
            else:
                report_save_failure(store)
                failed = True
        except ValueError:
            click.echo("Invalid interval. Must be between 1-60 seconds.", err=True)
            failed = True

    if failed:
        ctx.exit(1)


@cli.command(help="Reset total download counter")
def reset():
    pids = system.signal_monitors(signal.SIGUSR2)
    if not pids:
        click.echo("Monitoring is not running; nothing to reset.")
        return
    click.echo("Total download counter reset.")


def main():
    cli()


if __name__ == "__main__":
    main()
