"""Command-line interface for newsdesk."""

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

from newsdesk.authoring import ArticleEditor, PublishOutcome, normalize_candidate
from newsdesk.clients import ArticlesClient, AuthClient, StorageClient
from newsdesk.drafts import DRAFT_TTL, FileDraftStore, is_expired, load_snapshot, now_ms, purge_expired
from newsdesk.slugs import normalize_slug
from newsdesk.validation import check_article
from schemas import ArticleDraft

DEFAULT_DRAFT_DIR = Path("./workspace/drafts")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def backend_config(args: argparse.Namespace) -> dict:
    """Client config shared by the backend clients."""
    config = {"base_url": args.base_url}
    if args.api_key:
        config["api_key"] = args.api_key
    if args.access_token:
        config["access_token"] = args.access_token
    return config


def read_article(path: Path) -> ArticleDraft:
    """Load an article JSON file.

    Raises:
        ValueError: If the file is not valid JSON or not an article
    """
    with path.open("r") as f:
        return ArticleDraft.model_validate(json.load(f))


def slugify_text(args: argparse.Namespace) -> int:
    """Execute the slugify command."""
    setup_logging(args.verbose)
    slug = normalize_slug(" ".join(args.text))
    print(slug)
    return 0 if slug else 1


def validate_file(args: argparse.Namespace) -> int:
    """Execute the validate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        article = read_article(args.file)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read article {args.file}: {e}")
        return 1

    article = normalize_candidate(article)
    violations = check_article(article)
    if not violations:
        logger.info(f"{args.file}: ready to publish as '{article.slug}'")
        return 0

    logger.error(f"{args.file}: {len(violations)} problem(s)")
    for field, message in violations:
        logger.error(f"  - {field}: {message}")
    return 1


async def _publish(args: argparse.Namespace, article: ArticleDraft) -> PublishOutcome:
    config = backend_config(args)
    store = FileDraftStore(args.draft_dir)

    async with ArticlesClient(config) as articles, AuthClient(config) as auth, StorageClient(config) as storage:
        editor = ArticleEditor(articles, auth, storage, store, article=article)
        try:
            if args.draft:
                return await editor.save_draft()
            return await editor.publish()
        finally:
            editor.close()


def publish_file(args: argparse.Namespace) -> int:
    """Execute the publish command.

    On success the assigned article id is written back into the file so a
    later run updates the same row.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if not args.base_url:
        logger.error("Backend URL required: pass --base-url or set NEWSDESK_URL")
        return 1

    try:
        article = read_article(args.file)
    except (OSError, ValueError) as e:
        logger.error(f"Could not read article {args.file}: {e}")
        return 1

    outcome = asyncio.run(_publish(args, article))
    if not outcome.ok:
        logger.error(f"Failed to save {args.file}: {outcome.error}")
        if outcome.redirect_to:
            logger.error("Sign in and pass --access-token or set NEWSDESK_ACCESS_TOKEN")
        return 1

    data = json.loads(args.file.read_text())
    data["id"] = outcome.article_id
    args.file.write_text(json.dumps(data, indent=2))

    logger.info(f"Saved article {outcome.article_id}")
    logger.info(f"  Published: {outcome.published}")
    return 0


def list_drafts(args: argparse.Namespace) -> int:
    """Execute the drafts list command."""
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    store = FileDraftStore(args.draft_dir)
    now = now_ms()
    keys = store.keys()
    if not keys:
        logger.info(f"No drafts in {args.draft_dir}")
        return 0

    for key in keys:
        try:
            snapshot = store.get(key)
        except ValueError as e:
            logger.warning(f"{key}: unreadable ({e})")
            continue
        age_minutes = snapshot.age_ms(now) // 60000
        state = "expired" if is_expired(snapshot, now) else "live"
        title = snapshot.data.title or "(untitled)"
        print(f"{key}\t{age_minutes}m\t{state}\t{title}")
    return 0


def purge_drafts(args: argparse.Namespace) -> int:
    """Execute the drafts purge command."""
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    removed = purge_expired(FileDraftStore(args.draft_dir))
    logger.info(f"Removed {len(removed)} draft(s) older than {DRAFT_TTL}")
    for key in removed:
        logger.info(f"  - {key}")
    return 0


def show_draft(args: argparse.Namespace) -> int:
    """Execute the drafts show command."""
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    snapshot = load_snapshot(FileDraftStore(args.draft_dir), args.key)
    if snapshot is None:
        logger.error(f"No live draft for {args.key}")
        return 1
    print(snapshot.data.model_dump_json(indent=2, exclude={"image_file"}))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="newsdesk",
        description="Validate, publish and manage local drafts of news articles",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    slugify_parser = subparsers.add_parser(
        "slugify",
        help="Print the URL slug for a title",
    )
    slugify_parser.add_argument("text", nargs="+", help="Title or slug text")
    slugify_parser.set_defaults(func=slugify_text)

    validate_parser = subparsers.add_parser(
        "validate",
        help="Check an article JSON file against the publish rules",
    )
    validate_parser.add_argument("file", type=Path, help="Article JSON file")
    validate_parser.set_defaults(func=validate_file)

    publish_parser = subparsers.add_parser(
        "publish",
        help="Publish (or save as draft) an article JSON file",
        description="Run the full save sequence against the hosted backend: validate, check the slug, upload the image and write the row.",
    )
    publish_parser.add_argument("file", type=Path, help="Article JSON file")
    publish_parser.add_argument(
        "--draft",
        action="store_true",
        help="Save as an unpublished draft",
    )
    publish_parser.add_argument(
        "--base-url",
        type=str,
        default=os.environ.get("NEWSDESK_URL"),
        help="Backend base URL (default: $NEWSDESK_URL)",
    )
    publish_parser.add_argument(
        "--api-key",
        type=str,
        default=os.environ.get("NEWSDESK_API_KEY"),
        help="Backend public API key (default: $NEWSDESK_API_KEY)",
    )
    publish_parser.add_argument(
        "--access-token",
        type=str,
        default=os.environ.get("NEWSDESK_ACCESS_TOKEN"),
        help="Signed-in session token (default: $NEWSDESK_ACCESS_TOKEN)",
    )
    publish_parser.set_defaults(func=publish_file)

    drafts_parser = subparsers.add_parser(
        "drafts",
        help="Inspect local draft snapshots",
    )
    drafts_sub = drafts_parser.add_subparsers(dest="drafts_command", required=True)
    drafts_list = drafts_sub.add_parser("list", help="List snapshots with their age")
    drafts_list.set_defaults(func=list_drafts)
    drafts_purge = drafts_sub.add_parser("purge", help="Remove expired snapshots")
    drafts_purge.set_defaults(func=purge_drafts)
    drafts_show = drafts_sub.add_parser("show", help="Print a live snapshot")
    drafts_show.add_argument("key", help="Article id or 'new-article'")
    drafts_show.set_defaults(func=show_draft)

    default_draft_dir = Path(os.environ.get("NEWSDESK_DRAFT_DIR", DEFAULT_DRAFT_DIR))
    for sub in (publish_parser, drafts_list, drafts_purge, drafts_show):
        sub.add_argument(
            "--draft-dir",
            type=Path,
            default=default_draft_dir,
            help=f"Local draft directory (default: {default_draft_dir})",
        )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
