from pico_ioc import init
from pico_abtest.logging import configure_logging
from pico_abtest import (
    AbTestRegistry,
    AbTestSettings,
    AbTestValidator,
    CookieHandler,
    CrawlerDetector,
    RequestCookieHandler,
    UserAgentCrawlerDetector,
)

SETTINGS = AbTestSettings.from_mapping({
    "tests": [
        {"scope": "hero", "versions": ["classic", "video"], "version_for_crawlers": "classic", "expiration": "P30D"},
        {"scope": "pricing", "versions": ["monthly", "yearly", "both"], "weights": {"both": 50}},
    ],
})


def render(cookie_header: str, user_agent: str) -> None:
    cookies = RequestCookieHandler(cookie_header)
    container = init(
        modules=["pico_abtest"],
        overrides={
            AbTestSettings: SETTINGS,
            CookieHandler: cookies,
            CrawlerDetector: UserAgentCrawlerDetector(user_agent),
        },
    )
    registry = container.get(AbTestRegistry)

    crawler = registry.is_crawler
    if registry.should_render("video", "hero", crawler):
        print("<video hero>")
    if registry.should_render("classic", "hero", crawler):
        print("<classic hero>")
    print(f"pricing: {registry.get_version('pricing')}")

    for header in cookies.set_cookie_headers():
        print(f"Set-Cookie: {header}")


if __name__ == "__main__":
    configure_logging()
    report = AbTestValidator().validate(SETTINGS.tests)
    report.log()
    report.raise_first_error()
    render("", "Mozilla/5.0 (X11; Linux x86_64) Firefox/120.0")
    render('tracker={"id": "x y"}; pico-abtest-hero=video; pico-abtest-pricing=both', "Mozilla/5.0 (X11; Linux x86_64) Firefox/120.0")
    render("", "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)")
