#!/usr/bin/env python3
"""
run.py - Main entry point for the 3D four-in-a-row game
"""

import argparse
import os
import sys

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from cube4.debug import debug, DebugLevel
from cube4.interfaces.cli import SimpleCLI, positive_int
from cube4.utils import BOARD_SIZE

# --- Utility Functions ---

def configure_debug(args):
    """Configure debug level based on args.debug or args.debug_level."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.set_from_string(args.debug_level)
    if args.log_file:
        debug.configure(log_file=args.log_file)

def build_cli_argv(args):
    """Translate run.py arguments into SimpleCLI arguments."""
    argv = [args.command, '--size', str(args.size)]

    if args.debug:
        argv.append('--debug')
    if args.command == 'test' and args.position:
        argv.extend(['--position', args.position])
    if args.command == 'benchmark' and args.iterations:
        argv.extend(['--iterations', str(args.iterations)])
    if args.command == 'play':
        argv.extend(['--delay', str(args.delay)])
    return argv

# --- Game Command Handler ---

def handle_game_command(args):
    """Handle the 'game' component commands."""
    cli = SimpleCLI()
    cli.parse_args(build_cli_argv(args))
    if not args.debug:
        configure_debug(args)
    elif args.log_file:
        debug.configure(log_file=args.log_file)
    cli.run()

# --- Main Entry Point ---

def main():
    """Main entry point for the 3D four-in-a-row game."""
    parser = argparse.ArgumentParser(
        description='3D four-in-a-row on a cubic board',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

    # Play a two-player game on the default 5x5x5 board
    python run.py game play

    # Play on a 4x4x4 board with a slower falling piece
    python run.py game play --size 4 --delay 0.5

    # Analyse a position (size^3 comma-separated values, x-major, then y, then z)
    python run.py game test --size 4 --position 1,0,0,0,...

    # Benchmark performance with 5000 iterations
    python run.py game benchmark --iterations 5000

    # Log debug output to a file
    python run.py game play --debug_level debug --log_file cube4.log
    """
    )

    subparsers = parser.add_subparsers(dest='component', help='Component to run')

    game_parser = subparsers.add_parser('game',
        help='Run the game',
        description='Play 3D four-in-a-row or analyse positions')
    game_parser.add_argument('command',
        choices=['play', 'test', 'benchmark'],
        help='Game command: play (interactive game), test (analyse a position), '
             'benchmark (performance testing)')
    game_parser.add_argument('--size',
        type=int,
        default=BOARD_SIZE,
        help=f'Board edge length (default: {BOARD_SIZE})')
    game_parser.add_argument('--debug',
        action='store_true',
        help='Enable debug mode (equivalent to --debug_level debug)')
    game_parser.add_argument('--debug_level',
        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
        default='warning',
        help='Set debug level: none (silent), error, warning, info, debug, trace (most verbose)')
    game_parser.add_argument('--log_file',
        type=str,
        help='Also write log output to this file')
    game_parser.add_argument('--position',
        type=str,
        help='Board position to test (comma-separated values for test command)')
    game_parser.add_argument('--iterations',
        type=positive_int,
        default=1000,
        help='Number of iterations for benchmarking')
    game_parser.add_argument('--delay',
        type=float,
        default=0.15,
        help='Seconds per row while a dropped piece falls (play command)')

    args = parser.parse_args()
    if args.component == 'game':
        handle_game_command(args)
    else:
        parser.print_help()

if __name__ == "__main__":
    main()
