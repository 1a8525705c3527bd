"""Browser-like request headers for the bilibili web API.

The API rejects requests without a plausible browser signature and a
same-site referer. The cookie header is always sent, even without a
token, because quality gating depends on its presence.
"""

from __future__ import annotations

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

SITE_ORIGIN = "https://www.bilibili.com"

_BASE_HEADERS: dict[str, str] = {
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
    "Accept-Encoding": "gzip, deflate, br",
    "Origin": SITE_ORIGIN,
    "Sec-Ch-Ua": '"Not_A Brand";v="8", "Chromium";v="120", "Google Chrome";v="120"',
    "Sec-Ch-Ua-Mobile": "?0",
    "Sec-Ch-Ua-Platform": '"macOS"',
    "Sec-Fetch-Dest": "empty",
    "Sec-Fetch-Mode": "cors",
    "Sec-Fetch-Site": "same-site",
    "DNT": "1",
}


def build_headers(
    auth_token: str,
    referer: str,
    user_agent: str = BROWSER_USER_AGENT,
) -> dict[str, str]:
    """Build the header set for one API request.

    Returns a new dict on every call; an empty *auth_token* yields
    ``Cookie: SESSDATA=``.
    """
    headers = {"User-Agent": user_agent, **_BASE_HEADERS}
    headers["Referer"] = referer
    headers["Cookie"] = f"SESSDATA={auth_token}"
    return headers
