import argparse
import asyncio
import logging
import sys

import httpx

from article_drafter.api.schemas import TONES, Tone
from article_drafter.client.controller import FormController
from article_drafter.client.export import DownloadSaver
from article_drafter.config import get_settings


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Generate an article draft from a topic and key points.")
    parser.add_argument("--topic", required=True, help="Article topic (max 200 characters).")
    parser.add_argument(
        "--key-points",
        required=True,
        help="Points to cover, one per line or comma separated (max 2000 characters).",
    )
    parser.add_argument("--tone", choices=TONES, default=Tone.PROFESSIONAL.value)
    parser.add_argument("--api-url", default=settings.drafter_api_url, help="Base URL of the article service.")
    parser.add_argument("--copy", action="store_true", help="Copy the draft to the system clipboard.")
    parser.add_argument(
        "--download",
        nargs="?",
        const=settings.download_dir,
        default=None,
        metavar="DIR",
        help="Save the draft as <slug>.md (default dir: DOWNLOAD_DIR).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log request lifecycle to stderr.")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, transport: httpx.AsyncBaseTransport | None = None) -> int:
    settings = get_settings()
    async with httpx.AsyncClient(
        base_url=args.api_url,
        timeout=settings.llm_timeout_seconds,
        transport=transport,
    ) as client:
        controller = FormController(
            client,
            saver=DownloadSaver(args.download or settings.download_dir),
            cooldown_seconds=settings.generate_cooldown_seconds,
            flash_seconds=settings.export_flash_seconds,
        )
        controller.update_field("topic", args.topic)
        controller.update_field("key_points", args.key_points)
        controller.update_field("tone", args.tone)

        if not await controller.submit():
            print(f"error: {controller.error}", file=sys.stderr)
            return 1
        print(controller.generated_article)

        status = 0
        if args.copy and not controller.copy_to_clipboard():
            print(f"error: {controller.error}", file=sys.stderr)
            status = 1
        if args.download is not None:
            path = controller.download_as_file()
            if path is None:
                print(f"error: {controller.error}", file=sys.stderr)
                status = 1
            else:
                print(f"saved: {path}", file=sys.stderr)
        return status


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
