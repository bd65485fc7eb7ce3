#!/usr/bin/env python3
"""smugapi - command-line access to the SmugMug 1.2.x JSON API.

Usage:
    python -m smugapi albums [--nick NICKNAME]
    python -m smugapi tree [--nick NICKNAME]
    python -m smugapi images <album_id> <album_key>
    python -m smugapi upload --album <album_id> <file> [<file> ...]
    python -m smugapi stats <month> <year>
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from ._version import __version__
from .config import ConfigManager
from .config.manager import ConfigError
from .smugmug import SmugMugClient
from .smugmug.exceptions import SmugMugError
from .smugmug.models import Category


def setup_logging(verbose: bool = False, config: Optional[ConfigManager] = None) -> None:
    """Configure logging for the application.

    Args:
        verbose: If True, enable DEBUG level logging
        config: Loaded configuration; its logging.file gets a DEBUG file handler
    """
    level = logging.DEBUG if verbose else logging.INFO
    if config is not None and not verbose:
        level = getattr(logging, str(config.get("logging.level", "INFO")).upper(), logging.INFO)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s - %(name)s - %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(console_handler)

    if config is None:
        return

    log_file = config.get("logging.file")
    if not log_file:
        return

    try:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
    except OSError as e:
        root_logger.warning(f"Could not open log file {log_file}: {e}")
        return

    file_handler.setLevel(logging.DEBUG)  # Always DEBUG in file
    file_handler.setFormatter(logging.Formatter(
        config.get(
            "logging.format",
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    ))
    root_logger.addHandler(file_handler)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="smugapi",
        description="smugapi - command-line access to the SmugMug JSON API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List your albums
  python -m smugapi albums

  # List the public albums of another user
  python -m smugapi albums --nick someuser

  # Upload two photos into an album
  python -m smugapi upload --album 123456 one.jpg two.jpg --keywords "beach; summer"

  # Transfer statistics for March 2009
  python -m smugapi stats 3 2009
"""
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"smugapi {__version__}"
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to config file (default: ~/.smugapi/config.yaml)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    albums = subparsers.add_parser("albums", help="List albums")
    albums.add_argument("--nick", metavar="NICKNAME", help="List another user's albums")
    albums.add_argument("--heavy", action="store_true", help="Fetch full album details")

    tree = subparsers.add_parser("tree", help="Show the category/album tree")
    tree.add_argument("--nick", metavar="NICKNAME", help="Show another user's tree")

    images = subparsers.add_parser("images", help="List the images of an album")
    images.add_argument("album_id", type=int, help="Album ID")
    images.add_argument("album_key", help="Album key")

    upload = subparsers.add_parser("upload", help="Upload images into an album")
    upload.add_argument("files", nargs="+", metavar="FILE", help="Image files to upload")
    upload.add_argument("--album", type=int, required=True, metavar="ID", help="Target album ID")
    upload.add_argument("--caption", help="Caption for every uploaded image")
    upload.add_argument("--keywords", help="Keywords for every uploaded image")

    stats = subparsers.add_parser("stats", help="Show monthly transfer statistics")
    stats.add_argument("month", type=int, help="Month (1-12)")
    stats.add_argument("year", type=int, help="Year")

    return parser.parse_args(argv)


def login(client: SmugMugClient, config: ConfigManager) -> None:
    """Log in with the configured credentials, or anonymously without them."""
    email = config.get("smugmug.email")
    if email:
        response = client.login_with_password(email, config.get("smugmug.password", ""))
    else:
        response = client.login_anonymously()
    response.raise_for_error()


def print_albums(client: SmugMugClient, args: argparse.Namespace, config: ConfigManager) -> None:
    nick_name = args.nick or config.get("smugmug.nick_name") or None
    albums = client.get_albums(nick_name=nick_name, heavy=args.heavy or None).raise_for_error().result

    for album in albums:
        count = f"{album.image_count} images" if album.image_count is not None else ""
        print(f"{album.id!s:>10}  {album.key or '':<8}  {album.title or ''}  {count}")
    print(f"\n{len(albums)} album(s)")


def print_category(category: Category, depth: int = 0) -> None:
    indent = "  " * depth
    print(f"{indent}{category.name or '(unnamed)'} [{category.id}]")
    for album in category.albums:
        print(f"{indent}  - {album.title or ''} ({album.id}/{album.key})")
    for sub_category in category.sub_categories:
        print_category(sub_category, depth + 1)


def print_tree(client: SmugMugClient, args: argparse.Namespace, config: ConfigManager) -> None:
    nick_name = args.nick or config.get("smugmug.nick_name") or None
    for category in client.get_tree(nick_name=nick_name).raise_for_error().result:
        print_category(category)


def print_images(client: SmugMugClient, args: argparse.Namespace, config: ConfigManager) -> None:
    images = client.get_images(args.album_id, args.album_key).raise_for_error().result

    for image in images:
        print(f"{image.id!s:>10}  {image.key or '':<8}  {image.file_name or ''}")
    print(f"\n{len(images)} image(s)")


def upload_files(client: SmugMugClient, args: argparse.Namespace, config: ConfigManager) -> None:
    for file_name in args.files:
        response = client.upload_image(
            Path(file_name),
            album_id=args.album,
            caption=args.caption,
            keywords=args.keywords
        ).raise_for_error()

        image = response.result
        if image is not None:
            print(f"✓ {file_name} -> image {image.id} ({image.key})")
        else:
            print(f"✓ {file_name}")


def print_stats(client: SmugMugClient, args: argparse.Namespace, config: ConfigManager) -> None:
    albums = client.get_transfer_stats(args.month, args.year).raise_for_error().result

    print(f"{'Album':>10}  {'Bytes':>14}  {'Originals':>10}")
    for album in albums:
        print(f"{album.id!s:>10}  {album.bytes or 0:>14}  {album.original or 0:>10g}")


COMMANDS = {
    "albums": print_albums,
    "tree": print_tree,
    "images": print_images,
    "upload": upload_files,
    "stats": print_stats,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the smugapi CLI.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    args = parse_arguments(argv)
    logger = logging.getLogger(__name__)

    try:
        config = ConfigManager.load(config_path=args.config)
    except ConfigError as e:
        setup_logging(args.verbose)
        logger.error(f"Configuration error: {e}")
        print(f"✗ Configuration Error: {e}")
        return 2

    setup_logging(args.verbose, config)

    try:
        with SmugMugClient.from_config(config) as client:
            login(client, config)
            try:
                COMMANDS[args.command](client, args, config)
            finally:
                if client.session_id:
                    client.logout()
        return 0

    except SmugMugError as e:
        logger.error(f"SmugMug error: {e}", exc_info=args.verbose)
        print()
        print(f"✗ SmugMug Error: {e}")
        print()
        print("Troubleshooting:")
        print("  - Verify your API key and credentials in config.yaml")
        print("  - Check that the album ID and key are correct")
        return 3

    except KeyboardInterrupt:
        print()
        print("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
