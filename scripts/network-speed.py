#!/usr/bin/env python3

import json
import logging
import signal
import sys
import threading
import time

import click
from netspeed.data import network_speed as ns
from netspeed.monitor import LEFT_BUTTON, MIDDLE_BUTTON, RIGHT_BUTTON, Monitor
from netspeed.util import log, system
from netspeed.util.config import ConfigStore

sys.stdout.reconfigure(line_buffering=True)  # type: ignore


cache_dir = system.get_cache_directory()
condition = threading.Condition()
context_settings = dict(help_option_names=["-h", "--help"])
logfile = cache_dir / "waybar-network-speed.log"
logger = logging.getLogger("netspeed")
pidfile_name = "waybar-network-speed"
needs_fetch = False
needs_redraw = False
pending_clicks: list[int] = []


def refresh_handler(_signum: int, _frame: object | None):
    global needs_fetch, needs_redraw
    logger.info("received SIGHUP - re-fetching data")
    with condition:
        needs_fetch = True
        needs_redraw = True
        condition.notify()


def click_handler(button: int):
    def handler(signum: int, _frame: object | None):
        global needs_redraw
        logger.info(f"received {signal.Signals(signum).name} - click with button {button}")
        with condition:
            pending_clicks.append(button)
            needs_redraw = True
            condition.notify()

    return handler


def render_output(monitor: Monitor, reading: ns.Reading) -> tuple[str, str, str]:
    if reading.success:
        output_class = f"{monitor.style_class()} success"
    else:
        output_class = "error"

    return reading.text, output_class, monitor.tooltip(reading)


def emit(monitor: Monitor, reading: ns.Reading):
    text, output_class, tooltip = render_output(monitor, reading)
    print(json.dumps({"text": text, "class": output_class, "tooltip": tooltip}))


def take_pending() -> tuple[bool, bool, list[int]]:
    """
    Block until a signal handler asks for work, then hand back and clear the
    queued fetch/redraw flags and clicks.
    """
    global needs_fetch, needs_redraw

    with condition:
        while not (needs_fetch or needs_redraw):
            _ = condition.wait()

        fetch = needs_fetch
        redraw = needs_redraw
        clicks = pending_clicks[:]
        pending_clicks.clear()
        needs_fetch = False
        needs_redraw = False

    return fetch, redraw, clicks


def handle(
    monitor: Monitor,
    reading: ns.Reading | None,
    fetch: bool,
    redraw: bool,
    clicks: list[int],
) -> ns.Reading:
    changed = False
    for button in clicks:
        changed = monitor.click(button) or changed

    if fetch or changed or reading is None:
        reading = monitor.tick()

    if redraw:
        emit(monitor, reading)

    return reading


def worker(monitor: Monitor):
    reading: ns.Reading | None = None
    while True:
        reading = handle(monitor, reading, *take_pending())


@click.command(name="run", help="Show the host network speed from /proc/net/dev")
@click.option(
    "--interval",
    type=click.IntRange(1, 60),
    default=None,
    help="The update interval (in seconds), defaults to the configured one",
)
@click.option(
    "-t", "--test", default=False, is_flag=True, help="Print the output and exit"
)
@click.option("-d", "--debug", default=False, is_flag=True, help="Enable debug logging")
def main(interval: int | None, test: bool, debug: bool):
    global needs_fetch, needs_redraw

    log.configure(debug=debug, name="netspeed", logfile=logfile)
    monitor = Monitor(ConfigStore())

    if test:
        monitor.tick()
        time.sleep(1)
        text, output_class, tooltip = render_output(monitor, monitor.tick())
        print(text)
        print(output_class)
        print(tooltip)
        return

    logger.info("entering")

    _ = signal.signal(signal.SIGHUP, refresh_handler)
    _ = signal.signal(signal.SIGUSR1, click_handler(LEFT_BUTTON))
    _ = signal.signal(signal.SIGUSR2, click_handler(RIGHT_BUTTON))
    _ = signal.signal(signal.SIGRTMIN, click_handler(MIDDLE_BUTTON))

    system.write_pidfile(pidfile_name)
    threading.Thread(target=worker, args=(monitor,), daemon=True).start()

    try:
        while True:
            with condition:
                needs_fetch = True
                needs_redraw = True
                condition.notify()
            time.sleep(interval or monitor.store.refresh_interval)
    finally:
        system.remove_pidfile(pidfile_name)


if __name__ == "__main__":
    main()
