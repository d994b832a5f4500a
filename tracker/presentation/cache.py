from fastapi import Response

CACHE_HEADERS = {
    # Authenticated user data
    "private": {"Vary": "Cookie", "Cache-Control": "private, no-store"},
    # Semi-dynamic data that still varies by cookie
    "public_short": {
        "Vary": "Cookie",
        "Cache-Control": "public, max-age=0, s-maxage=300, stale-while-revalidate=3600",
    },
    # Guest-only data, safe for shared caches
    "public_guest": {
        "Cache-Control": "public, max-age=0, s-maxage=300, stale-while-revalidate=3600",
    },
    # Mostly static data
    "public_long": {
        "Vary": "Cookie",
        "Cache-Control": "public, max-age=0, s-maxage=3600, stale-while-revalidate=86400",
    },
}


def apply_cache_headers(response: Response, policy: str) -> None:
    response.headers.update(CACHE_HEADERS[policy])
