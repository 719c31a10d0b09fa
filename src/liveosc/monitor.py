#!/usr/bin/env python3
"""
LiveOSC Monitor - terminal view of a running Live set
Connects to the LiveOSC remote script, waits for the set to load and
renders song, tracks, returns and master devices with rich
"""

import argparse
import asyncio
import sys
from dataclasses import replace
from typing import List, Optional

from rich import box
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import LiveOSCConfig, apply_env_file
from .device import Device
from .session import LiveOSC
from .song import Song
from .track import Track


def _level(value) -> str:
    if value is None:
        return "-"
    return f"{value:.2f}" if isinstance(value, float) else str(value)


def _flags(entity) -> str:
    flags = []
    if getattr(entity, 'mute', 0):
        flags.append("[red]M[/red]")
    if getattr(entity, 'solo', 0):
        flags.append("[yellow]S[/yellow]")
    if getattr(entity, 'arm', 0):
        flags.append("[magenta]A[/magenta]")
    return " ".join(flags)


def _playing_clip(track: Track) -> str:
    for clip in track.clips:
        if clip.is_playing:
            return f"{clip.id}: {clip.name or ''}"
    return ""


def song_panel(song: Song) -> Panel:
    state = "[green]PLAYING[/green]" if song.is_playing else "[dim]STOPPED[/dim]"
    text = Text.from_markup(
        f"{state}   tempo [bold]{song.tempo:.2f}[/bold]   beat {song.beat}   "
        f"scene {song.scene}/{song.num_scenes}   "
        f"master vol {_level(song.volume)} pan {_level(song.pan)}"
    )
    return Panel(text, title="Song", box=box.ROUNDED, style="cyan")


def tracks_table(song: Song) -> Table:
    table = Table(title="Tracks", box=box.SIMPLE_HEAD, expand=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Vol", justify="right")
    table.add_column("Pan", justify="right")
    table.add_column("M/S/A")
    table.add_column("Playing")
    for track in song.tracks:
        table.add_row(
            str(track.id),
            track.name or "",
            "audio" if track.audio else "midi",
            _level(track.volume),
            _level(track.pan),
            _flags(track),
            _playing_clip(track),
        )
    return table


def returns_table(song: Song) -> Table:
    table = Table(title="Returns", box=box.SIMPLE_HEAD, expand=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name")
    table.add_column("Vol", justify="right")
    table.add_column("Pan", justify="right")
    table.add_column("M/S")
    table.add_column("Devices", justify="right")
    for ret in song.returns:
        table.add_row(
            str(ret.id),
            ret.name or "",
            _level(ret.volume),
            _level(ret.pan),
            _flags(ret),
            str(len(ret.devices)),
        )
    return table


def devices_table(devices: List[Device]) -> Table:
    table = Table(title="Master devices", box=box.SIMPLE_HEAD, expand=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name")
    table.add_column("Params", justify="right")
    for device in devices:
        table.add_row(str(device.id), device.name, str(len(device.params)))
    return table


def render(song: Song) -> Group:
    """Whole-set snapshot"""
    return Group(
        song_panel(song),
        tracks_table(song),
        returns_table(song),
        devices_table(song.devices),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="liveosc-monitor",
        description="LiveOSC Monitor - show the state of a running Ableton Live set",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  liveosc-monitor                        # Print one snapshot
  liveosc-monitor --watch                # Keep refreshing
  liveosc-monitor --live-host 10.0.0.5   # Live on another machine
  liveosc-monitor --verbose              # Print OSC traffic
        """
    )
    parser.add_argument("--host", help="Host to listen on (LIVEOSC_HOST)")
    parser.add_argument("--port", type=int, help="Port to listen on (LIVEOSC_PORT)")
    parser.add_argument("--live-host", help="Host Live runs on (LIVEOSC_LIVE_HOST)")
    parser.add_argument("--live-port", type=int, help="Port LiveOSC listens on (LIVEOSC_LIVE_PORT)")
    parser.add_argument("--wait", type=float, help="Seconds before the ready probe (LIVEOSC_WAIT_TIME)")
    parser.add_argument("--timeout", type=float, default=10.0,
                        help="Give up if Live does not answer in this many seconds (default: 10)")
    parser.add_argument("--watch", action="store_true", help="Keep the display refreshing until Ctrl+C")
    parser.add_argument("--verbose", action="store_true", help="Print OSC traffic")
    return parser


def config_from_args(args: argparse.Namespace, base: Optional[LiveOSCConfig] = None) -> LiveOSCConfig:
    """Command line flags override the environment"""
    config = base or LiveOSCConfig.from_env()
    overrides = {}
    if args.host is not None:
        overrides['host'] = args.host
    if args.port is not None:
        overrides['port'] = args.port
    if args.live_host is not None:
        overrides['live_host'] = args.live_host
    if args.live_port is not None:
        overrides['live_port'] = args.live_port
    if args.wait is not None:
        overrides['wait_time'] = args.wait
    if args.verbose:
        overrides['verbose'] = True
    return replace(config, **overrides)


async def run(config: LiveOSCConfig, timeout: float, watch: bool, console: Console) -> int:
    async with LiveOSC(config) as live:
        try:
            song = await live.wait_ready(timeout)
        except asyncio.TimeoutError:
            console.print(f"[red]No answer from Live at {config.live_host}:{config.live_port} "
                          f"after {timeout:.1f}s[/red]")
            return 1

        if not watch:
            console.print(render(song))
            return 0

        with Live(render(song), console=console, refresh_per_second=4) as display:
            while True:
                await asyncio.sleep(0.25)
                display.update(render(live.song))


def main(argv: Optional[List[str]] = None) -> int:
    apply_env_file()
    args = build_parser().parse_args(argv)
    console = Console()
    try:
        config = config_from_args(args)
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        return 2
    try:
        return asyncio.run(run(config, args.timeout, args.watch, console))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
