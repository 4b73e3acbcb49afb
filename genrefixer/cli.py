"""
genre-fixer command line entry point.

Usage:
    genre-fixer ~/Music/Some\\ Album --max-tags 10
    genre-fixer song.mp3 --interactive --dry-run
    genre-fixer --check-genre "hip-hop" reggaeton 1985

Exit codes: 0 done or cancelled, 1 genre table unusable, 2 bad configuration.
"""
import argparse
import logging
import sys
from typing import List, Optional

from .artist_cache import SessionCache
from .config_loader import Config, RunOptions
from .dialog import prompt_run_options
from .errors import ConfigInvalid, DialogCancelled, IndexLoadFailure
from .genre.index import CanonicalGenreIndex, DEFAULT_TABLE_PATH
from .genre_fixer import GenreFixer
from .genre_resolver import GenreResolver
from .itunes_client import ITunesStoreClient
from .lastfm_client import LastFMClient
from .library import MutagenLibrary
from .logging_utils import configure_logging
from .tag_source import TagSource

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INDEX_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='genre-fixer',
        description='Write Last.FM tags to grouping and a canonical genre to genre',
    )
    parser.add_argument('paths', nargs='*', help='Audio files or folders to tag')
    parser.add_argument('--config', default='config.yaml', metavar='PATH',
                        help='YAML configuration file (default: config.yaml, optional)')
    parser.add_argument('--max-tags', type=int, help='Maximum tags to save per query')
    parser.add_argument('--min-scrobs', type=int, help='Minimum popularity of a tag')
    parser.add_argument('--set-genre', dest='set_genre', action='store_true', default=None,
                        help='Also write the genre field (default)')
    parser.add_argument('--no-set-genre', dest='set_genre', action='store_false',
                        help='Only write the grouping field')
    parser.add_argument('--dry-run', action='store_true', default=None,
                        help='Resolve and log without writing files')
    parser.add_argument('--interactive', action='store_true',
                        help='Ask for run options before starting')
    parser.add_argument('--genre-table', metavar='PATH',
                        help='Custom genre table (Genre=synonym,... per line)')
    parser.add_argument('--check-genre', nargs='+', metavar='TAG',
                        help='Resolve tags against the genre table offline and exit')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Console log level (default: INFO)')
    parser.add_argument('--debug', action='store_true', help='Same as --log-level DEBUG')
    parser.add_argument('--quiet', action='store_true', help='Only warnings and errors')
    parser.add_argument('--log-file', metavar='PATH', help='Also write a DEBUG log to this file')
    return parser


def log_level(args: argparse.Namespace) -> str:
    """--debug beats --quiet, which beats --log-level"""
    if args.debug:
        return 'DEBUG'
    if args.quiet:
        return 'WARNING'
    return args.log_level


def resolve_run_options(args: argparse.Namespace, config: Config) -> RunOptions:
    """Merge config values with CLI overrides (CLI wins)"""
    options = config.run_options()
    if args.max_tags is not None:
        if args.max_tags < 0:
            raise ConfigInvalid(f"--max-tags must not be negative, got {args.max_tags}")
        options.max_tags = args.max_tags
    if args.min_scrobs is not None:
        if args.min_scrobs < 0:
            raise ConfigInvalid(f"--min-scrobs must not be negative, got {args.min_scrobs}")
        options.min_scrobs = args.min_scrobs
    if args.set_genre is not None:
        options.set_genre = args.set_genre
    return options


def check_genres(index: CanonicalGenreIndex, tags: List[str]) -> None:
    """Log the genre each tag resolves to, without any network access"""
    resolver = GenreResolver(index, tag_source=None)
    for tag in tags:
        backups: List[str] = []
        genre = resolver.tag_to_genre(tag, backups)
        if genre:
            logger.info(f'"{tag}" -> {genre}')
        elif backups:
            logger.info(f'"{tag}" -> (backup) {backups[0]}')
        else:
            logger.info(f'"{tag}" -> (no genre)')


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(level=log_level(args), log_file=args.log_file)

    try:
        config = Config(args.config)
        table_path = args.genre_table or config.genre_table_path or DEFAULT_TABLE_PATH
        index = CanonicalGenreIndex.from_file(table_path)
        index.build()
    except ConfigInvalid as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR
    except IndexLoadFailure as e:
        logger.error(f"Genre table error: {e}")
        return EXIT_INDEX_FAILURE

    if args.check_genre:
        check_genres(index, args.check_genre)
        return EXIT_OK

    try:
        options = resolve_run_options(args, config)
        if args.interactive:
            options = prompt_run_options(options)
        if not args.paths:
            raise ConfigInvalid("No files or folders given")
        if not config.lastfm_api_key:
            raise ConfigInvalid("Last.FM API key missing (set lastfm.api_key or LASTFM_API_KEY)")
    except DialogCancelled:
        logger.info("Looks like the dialog was cancelled")
        return EXIT_OK
    except ConfigInvalid as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    dry_run = args.dry_run if args.dry_run is not None else config.dry_run
    logger.info("Starting GenreFixer ...")
    logger.info(f"Options: max_tags={options.max_tags}, min_scrobs={options.min_scrobs}, "
                f"set_genre={options.set_genre}, dry_run={dry_run}")

    lastfm = LastFMClient(
        config.lastfm_api_key,
        max_tags=options.max_tags,
        min_scrobs=options.min_scrobs,
        timeout=config.lastfm_timeout,
    )
    itunes = ITunesStoreClient(timeout=config.itunes_timeout) if config.itunes_enabled else None
    tag_source = TagSource(lastfm, itunes)
    cache = SessionCache()
    resolver = GenreResolver(index, tag_source, cache=cache)
    library = MutagenLibrary(args.paths, dry_run=dry_run)

    fixer = GenreFixer(resolver, library, set_genre=options.set_genre)
    fixer.start()
    logger.debug(f"Upstream queries: {tag_source.queries}, failures: {tag_source.failures}, "
                 f"cache: {cache.get_stats()}")
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
