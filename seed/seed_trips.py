#!/usr/bin/env python3
"""
Seed script to populate trips and images via API endpoints.

The users referenced below must already exist in the users table.

Run:
    python seed/seed_trips.py \
      --api-id <API-ID> \
      --user-id <USER-ID>
"""

import argparse
import base64
import sys
from pathlib import Path
from typing import Any, cast

import requests
from aws_lambda_powertools import Logger

logger = Logger(service="seed")

BASE_API_URL = "http://localhost:4566/restapis/{0}/snd/_user_request_/trips"

# 1x1 PNG used when no image directory is given
PLACEHOLDER_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)

SAMPLE_TRIPS: list[dict[str, Any]] = [
    {
        "title": "Paris",
        "images": [
            {"caption": "Eiffel at dusk", "tags": ["paris", "tower"]},
            {"caption": "Louvre courtyard", "tags": ["museum"]},
        ],
    },
    {
        "title": "Kyoto",
        "images": [
            {"caption": "Fushimi Inari gates", "tags": ["shrine", "japan", "red"]},
        ],
    },
    {"title": "Lisbon", "images": []},
]

CONTENT_TYPES = {".jpg": "image/jpeg", ".jpeg": "image/jpeg", ".png": "image/png"}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed trips via Trip Sharing API")

    parser.add_argument(
        "--api-id",
        required=True,
        help="Base API ID (e.g. LocalStack API Gateway ID)",
    )
    parser.add_argument(
        "--user-id",
        required=True,
        help="Existing user that owns the seeded trips",
    )
    parser.add_argument(
        "--images-dir",
        type=Path,
        default=None,
        help="Directory of .jpg/.png files to upload instead of a placeholder",
    )

    return parser.parse_args()


def load_images(images_dir: Path | None) -> list[tuple[str, bytes, str]]:
    if images_dir is None:
        return [("placeholder.png", PLACEHOLDER_PNG, "image/png")]

    files = sorted(p for p in images_dir.iterdir() if p.suffix.lower() in CONTENT_TYPES)
    if not files:
        logger.warning("No images found, using placeholder", extra={"path": str(images_dir)})
        return [("placeholder.png", PLACEHOLDER_PNG, "image/png")]

    return [(p.name, p.read_bytes(), CONTENT_TYPES[p.suffix.lower()]) for p in files]


def seed_trips() -> None:
    try:
        args = parse_args()
        images = load_images(args.images_dir)
        base_url = BASE_API_URL.format(args.api_id)

        logger.info("Starting seeding process", extra={"api_base_url": base_url})

        image_index = 0
        for sample in SAMPLE_TRIPS:
            response = requests.post(
                base_url,
                json={"title": sample["title"], "userId": args.user_id},
                timeout=30,
            )

            if response.status_code != 201:
                logger.error(
                    "Failed to create trip",
                    extra={
                        "title": sample["title"],
                        "status": response.status_code,
                        "response": response.text,
                    },
                )
                continue

            trip_id = cast(dict[str, Any], response.json())["trip"]["id"]
            logger.info("Seeded trip", extra={"trip_id": trip_id, "title": sample["title"]})

            for image in sample["images"]:
                file_name, data, content_type = images[image_index % len(images)]
                image_index += 1

                fields = {"caption": image["caption"]}
                for position, tag in enumerate(image["tags"], start=1):
                    fields[f"tag{position}"] = tag

                upload = requests.post(
                    f"{base_url}/{trip_id}",
                    data=fields,
                    files={"file": (file_name, data, content_type)},
                    timeout=30,
                )

                if upload.status_code == 201:
                    logger.info(
                        "Seeded image",
                        extra={"trip_id": trip_id, "location": upload.json().get("location")},
                    )
                else:
                    logger.error(
                        "Failed to seed image",
                        extra={
                            "trip_id": trip_id,
                            "status": upload.status_code,
                            "response": upload.text,
                        },
                    )

        logger.info("Seeding completed")

        list_response = requests.get(base_url, timeout=30)
        logger.info(
            "List trips response",
            extra={
                "status": list_response.status_code,
                "response": list_response.json() if list_response.ok else list_response.text,
            },
        )

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    seed_trips()
