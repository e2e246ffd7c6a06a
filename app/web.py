"""HTML rendering of the shows listing and episodes drill-down."""

from __future__ import annotations

from html import escape
from textwrap import dedent

from .controller import EpisodesPage, ShowsPage, ViewName
from .models import Episode, SelectOption, Show


PAGE_TEMPLATE = dedent(
    """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>__APP_NAME__</title>
    <style>
        :root {
            color-scheme: dark;
            font-family: 'Inter', 'Segoe UI', system-ui, -apple-system, sans-serif;
            --surface: #141414;
            --outline: #2b2b2b;
            --text-muted: #a6a6a6;
            background: #000000;
            color: #f5f5f5;
        }
        body {
            margin: 0;
        }
        main {
            max-width: 1200px;
            margin: 0 auto;
            padding: 2rem 1.5rem 4rem;
        }
        nav {
            display: flex;
            gap: 1rem;
            align-items: center;
            margin-bottom: 1.5rem;
        }
        a {
            color: inherit;
        }
        .grid {
            display: grid;
            grid-template-columns: repeat(auto-fill, minmax(260px, 1fr));
            gap: 1.25rem;
        }
        .show-card,
        .episode-card {
            background: var(--surface);
            border: 1px solid var(--outline);
            border-radius: 16px;
            padding: 1rem;
        }
        .show-card img,
        .episode-card img {
            width: 100%;
            border-radius: 12px;
        }
        .badge {
            display: inline-block;
            margin-right: 0.5rem;
            color: var(--text-muted);
        }
        .count {
            color: var(--text-muted);
        }
    </style>
</head>
<body>
    <main>
        <nav>__NAV__</nav>
        __BODY__
    </main>
</body>
</html>
    """
).strip()

NO_SUMMARY = "No summary available."


def _options_html(options: list[SelectOption], selected: str) -> str:
    rendered = []
    for value, label in options:
        marker = " selected" if value == selected else ""
        rendered.append(
            f'<option value="{escape(value)}"{marker}>{escape(label)}</option>'
        )
    return "".join(rendered)


def render_show_card(show: Show) -> str:
    rating = show.rating if show.rating is not None else "N/A"
    runtime = show.runtime if show.runtime is not None else "N/A"
    image = escape(show.image or "")
    name = escape(show.name)
    return (
        '<article class="show-card">'
        f'<a href="/shows/{show.id}">'
        f'<img src="{image}" alt="{name}" />'
        f"<h3>{name}</h3></a>"
        f"<div>{show.summary or NO_SUMMARY}</div>"
        f'<div><span class="badge">{escape(show.status)}</span>'
        f'<span class="badge">Rating {rating}</span>'
        f'<span class="badge">{runtime}m</span></div>'
        f"<div><strong>Genres:</strong> {escape(', '.join(show.genres))}</div>"
        "</article>"
    )


def render_episode_card(episode: Episode) -> str:
    name = escape(episode.name)
    image = (
        f'<img src="{escape(episode.image)}" alt="{name}" />' if episode.image else ""
    )
    return (
        '<article class="episode-card">'
        f"<h3><strong>{episode.code}</strong> - {name}</h3>"
        f"{image}"
        f"<div>{episode.summary or NO_SUMMARY}</div>"
        f'<a href="{escape(episode.url)}" target="_blank" rel="noopener">'
        "View on TVMaze.com</a>"
        "</article>"
    )


class HtmlRenderer:
    """Keeps the latest rendered state and turns it into an HTML document."""

    def __init__(self, app_name: str = "Show Browser"):
        self.app_name = app_name
        self.active: ViewName = "shows"
        self.shows_page: ShowsPage | None = None
        self.episodes_page: EpisodesPage | None = None
        self.messages: dict[ViewName, str | None] = {"shows": None, "episodes": None}
        self.show_options: list[SelectOption] = []
        self.episode_options: list[SelectOption] = []
        self.heading = ""

    def render_loading(
        self, view: ViewName, message: str, *, heading: str | None = None
    ) -> None:
        self.render_error(view, message, heading=heading)

    def render_shows(self, page: ShowsPage) -> None:
        self.active = "shows"
        self.messages["shows"] = None
        self.shows_page = page

    def render_episodes(self, page: EpisodesPage) -> None:
        self.active = "episodes"
        self.messages["episodes"] = None
        self.episodes_page = page

    def render_error(
        self, view: ViewName, message: str, *, heading: str | None = None
    ) -> None:
        self.active = view
        self.messages[view] = message
        if view == "episodes":
            self.episodes_page = None
            self.heading = heading or ""

    def fill_show_select(self, options: list[SelectOption]) -> None:
        self.show_options = list(options)

    def fill_episode_select(self, options: list[SelectOption]) -> None:
        self.episode_options = list(options)

    def render_document(self, current_show_id: int | None = None) -> str:
        """Return the full HTML page for the active view."""

        if self.active == "episodes":
            nav, body = self._episodes_html(current_show_id)
        else:
            nav, body = "", self._shows_html()
        return (
            PAGE_TEMPLATE.replace("__APP_NAME__", escape(self.app_name))
            .replace("__NAV__", nav)
            .replace("__BODY__", body)
        )

    def _shows_html(self) -> str:
        page = self.shows_page
        query = page.query if page else ""
        search = (
            '<form action="/search" method="get">'
            f'<input type="search" name="q" value="{escape(query)}" '
            'placeholder="Search shows" /></form>'
        )
        message = self.messages["shows"]
        if message or page is None:
            return f'{search}<div id="shows-root">{escape(message or "")}</div>'
        cards = "".join(render_show_card(show) for show in page.shows)
        return (
            f'{search}<p class="count">{escape(page.count_label)}</p>'
            f'<div id="shows-root" class="grid">{cards}</div>'
        )

    def _episodes_html(self, current_show_id: int | None) -> tuple[str, str]:
        page = self.episodes_page
        show_select = (
            '<form action="/switch" method="get"><select name="show">'
            f"{_options_html(self.show_options, str(current_show_id or ''))}"
            '</select><button type="submit">Go</button></form>'
        )
        heading = escape(page.heading if page else self.heading)
        nav = (
            '<a href="/back">Back to shows</a>'
            f'<span id="nav-current">{heading}</span>{show_select}'
        )
        message = self.messages["episodes"]
        if message or page is None:
            return nav, f'<div id="root">{escape(message or "")}</div>'

        controls = (
            '<form action="/episodes" method="get"><select name="episode">'
            f"{_options_html(self.episode_options, page.selected)}"
            '</select><button type="submit">Show</button></form>'
            '<form action="/search" method="get">'
            f'<input type="search" name="q" value="{escape(page.query)}" '
            'placeholder="Search episodes" /></form>'
        )
        cards = "".join(render_episode_card(episode) for episode in page.episodes)
        body = (
            f'{controls}<p class="count">{escape(page.count_label)}</p>'
            f'<div id="root" class="grid">{cards}</div>'
        )
        return nav, body
