import logging
import urllib.parse
from typing import Any

import httpx

from app.core.config import settings

log = logging.getLogger(__name__)

ACCEPTED = "Accepted"

RECENT_QUERY = """
query recentSolved($username: String!) {
  recentSubmissionList(username: $username) {
    title
    titleSlug
    timestamp
  }
}
"""

SUBMISSION_LIST_QUERY = """
query submissionList($offset: Int!, $limit: Int!, $username: String!) {
  submissionList(offset: $offset, limit: $limit, username: $username) {
    hasNext
    submissions {
      titleSlug
      statusDisplay
    }
  }
}
"""


class LeetCodeError(Exception):
    """Upstream LeetCode call failed or answered with something unusable."""


def _headers() -> dict:
    return {
        "Accept": "application/json, text/plain, */*",
        "User-Agent": settings.user_agent,
        "Referer": f"{settings.leetcode_base_url}/",
    }


def make_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.timeout, headers=_headers())


def _to_int(value, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return default


def _clean_slug(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


async def graphql_request(client: httpx.AsyncClient, query: str, variables: dict[str, Any]) -> dict[str, Any]:
    resp = await client.post(
        f"{settings.leetcode_base_url}/graphql",
        json={"query": query, "variables": variables},
    )

    raw = resp.text
    try:
        payload = resp.json() if raw else {}
    except ValueError as exc:
        raise LeetCodeError(f"LeetCode GraphQL returned non-JSON response ({resp.status_code})") from exc

    if not resp.is_success:
        raise LeetCodeError(f"LeetCode GraphQL request failed ({resp.status_code})")

    if not isinstance(payload, dict):
        return {}

    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        first = errors[0] if isinstance(errors[0], dict) else {}
        raise LeetCodeError(first.get("message") or "LeetCode GraphQL returned errors")

    data = payload.get("data")
    return data if isinstance(data, dict) else {}


async def fetch_recent_submissions(client: httpx.AsyncClient, username: str) -> list[dict]:
    """
    Recent submissions for ``username``, one entry per problem.

    Collisions on ``titleSlug`` keep the latest timestamp; the result is
    sorted newest first.
    """
    data = await graphql_request(client, RECENT_QUERY, {"username": username})
    items = data.get("recentSubmissionList")
    if not isinstance(items, list):
        items = []

    by_slug: dict[str, dict] = {}
    for item in items:
        if not isinstance(item, dict):
            continue
        slug = _clean_slug(item.get("titleSlug"))
        if not slug:
            continue

        timestamp = _to_int(item.get("timestamp") or 0)
        existing = by_slug.get(slug)
        if existing is None or timestamp > existing["timestamp"]:
            by_slug[slug] = {
                "title": item.get("title") or slug,
                "titleSlug": slug,
                "timestamp": timestamp,
            }

    result = sorted(by_slug.values(), key=lambda sub: sub["timestamp"], reverse=True)
    log.info("LeetCode recent submissions: user=%s raw=%d unique=%d", username, len(items), len(result))
    return result


async def fetch_accepted_slugs_graphql(
    client: httpx.AsyncClient,
    username: str,
    page_size: int | None = None,
    max_pages: int | None = None,
) -> set[str]:
    page_size = page_size or settings.page_size
    max_pages = max_pages or settings.max_pages

    accepted: set[str] = set()
    offset = 0
    pages = 0
    for _ in range(max_pages):
        data = await graphql_request(
            client,
            SUBMISSION_LIST_QUERY,
            {"offset": offset, "limit": page_size, "username": username},
        )
        pages += 1
        submission_list = data.get("submissionList")
        if not isinstance(submission_list, dict):
            submission_list = {}
        submissions = submission_list.get("submissions")
        if not isinstance(submissions, list):
            submissions = []

        for sub in submissions:
            if not isinstance(sub, dict):
                continue
            slug = _clean_slug(sub.get("titleSlug"))
            if slug and sub.get("statusDisplay") == ACCEPTED:
                accepted.add(slug)

        if not submission_list.get("hasNext") or not submissions:
            break
        offset += page_size

    log.info("LeetCode GraphQL history: user=%s pages=%d accepted=%d", username, pages, len(accepted))
    return accepted


async def fetch_accepted_slugs_public(
    client: httpx.AsyncClient,
    username: str,
    page_size: int | None = None,
    max_pages: int | None = None,
) -> set[str]:
    page_size = page_size or settings.page_size
    max_pages = max_pages or settings.max_pages
    url = f"{settings.leetcode_base_url}/api/submissions/{urllib.parse.quote(username, safe='')}/"

    accepted: set[str] = set()
    offset = 0
    pages = 0
    for _ in range(max_pages):
        resp = await client.get(url, params={"offset": offset, "limit": page_size})
        if not resp.is_success:
            raise LeetCodeError(f"Public submissions API failed ({resp.status_code})")
        try:
            data = resp.json()
        except ValueError as exc:
            raise LeetCodeError(f"Public submissions API returned non-JSON response ({resp.status_code})") from exc
        pages += 1
        if not isinstance(data, dict):
            data = {}

        submissions = data.get("submissions_dump")
        if not isinstance(submissions, list):
            submissions = []

        for sub in submissions:
            if not isinstance(sub, dict):
                continue
            slug = sub.get("title_slug")
            slug = slug.strip() if isinstance(slug, str) else ""
            if not slug:
                continue
            status = sub.get("status_display") or sub.get("statusDisplay")
            if status == ACCEPTED:
                accepted.add(slug)

        if not data.get("has_next") or not submissions:
            break
        offset += page_size

    log.info("LeetCode public history: user=%s pages=%d accepted=%d", username, pages, len(accepted))
    return accepted
