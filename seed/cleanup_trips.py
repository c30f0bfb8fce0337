#!/usr/bin/env python3
"""
Cleanup script to remove seeded trips via API endpoints.

Deleting a trip removes its image records; stored image files stay in the
bucket.

Run:
    python seed/cleanup_trips.py \
      --api-id <API-ID> \
      --user-id <USER-ID>
"""

import argparse
import sys
from typing import Any, cast

import requests
from aws_lambda_powertools import Logger

logger = Logger(service="cleanup")

BASE_API_URL = "http://localhost:4566/restapis/{0}/snd/_user_request_/trips"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cleanup seeded trips via Trip Sharing API")

    parser.add_argument(
        "--api-id",
        required=True,
        help="API Gateway ID (LocalStack)",
    )
    parser.add_argument(
        "--user-id",
        required=True,
        help="User ID whose trips should be deleted",
    )

    return parser.parse_args()


def cleanup_trips() -> None:
    try:
        args = parse_args()
        base_url = BASE_API_URL.format(args.api_id)

        logger.info(
            "Starting cleanup process",
            extra={"api_base_url": base_url, "user_id": args.user_id},
        )

        response = requests.get(base_url, timeout=30)

        if not response.ok:
            logger.error(
                "Failed to list trips",
                extra={"status": response.status_code, "response": response.text},
            )
            sys.exit(1)

        trips = cast(list[dict[str, Any]], response.json().get("trips", []))
        owned = [trip for trip in trips if trip.get("userId") == args.user_id]

        if not owned:
            logger.info("No trips found for cleanup")
            return

        for trip in owned:
            delete_resp = requests.delete(f"{base_url}/{trip['id']}", timeout=30)

            if delete_resp.ok:
                logger.info("Deleted trip", extra={"trip_id": trip["id"]})
            else:
                logger.error(
                    "Failed to delete trip",
                    extra={
                        "trip_id": trip["id"],
                        "status": delete_resp.status_code,
                        "response": delete_resp.text,
                    },
                )

        logger.info("Cleanup completed successfully")

    except Exception as exc:
        logger.exception("Cleanup failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    cleanup_trips()
