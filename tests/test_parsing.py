from instaview.parsing import collect_page_assets, parse_media_list, probe_page_signals
from instaview.results import MediaItem

MEDIA_PAGE = """
<html><body>
  <ul class="profile-media-list">
    <li class="profile-media-list__item">
      <img class="media-content__image" src="https://cdn.example.com/a.jpg" alt="first post">
      <p class="media-content__caption">  Sunset at the pier  </p>
      <a class="button button--filled button__download" href="https://dl.example.com/a.jpg">Download</a>
      <span class="media-content__meta-like">1.2k</span>
      <span class="media-content__meta-time" title="2024-05-01 18:00">3 hours ago</span>
    </li>
    <li class="profile-media-list__item">
      <img class="media-content__image" src="https://cdn.example.com/b.jpg">
    </li>
    <li class="profile-media-list__item"><div class="placeholder"></div></li>
  </ul>
  <img src="/static/logo.png">
  <img src="https://cdn.example.com/a.jpg">
  <a href="/faq">FAQ</a>
  <a href="">empty</a>
</body></html>
"""

LANDING_PAGE = """
<html><body>
  <form class="search-form">
    <input class="search search-form__input" type="text" placeholder="@username">
    <input type="hidden" name="username_hint" value="x">
    <input type="submit">
  </form>
  <img src="https://storiesig.info/a.png">
  <img src="/relative.png">
  <img src="https://storiesig.info/b.png">
  <img src="https://storiesig.info/c.png">
  <img src="https://storiesig.info/d.png">
</body></html>
"""


def test_parse_media_list_extracts_fields():
    items = parse_media_list(MEDIA_PAGE)

    assert len(items) == 3
    first = items[0]
    assert first.image_url == "https://cdn.example.com/a.jpg"
    assert first.alt_text == "first post"
    assert first.caption == "Sunset at the pier"
    assert first.download_url == "https://dl.example.com/a.jpg"
    assert first.likes == "1.2k"
    assert first.time == "3 hours ago"
    assert first.time_title == "2024-05-01 18:00"


def test_parse_media_list_keeps_partial_and_bare_items():
    items = parse_media_list(MEDIA_PAGE)
    assert items[1].image_url == "https://cdn.example.com/b.jpg"
    assert items[1].caption is None

    # an entry with no recognised content still counts as a media item
    assert items[2] == MediaItem()


def test_parse_media_list_on_page_without_results():
    assert parse_media_list("<html><body><p>No stories</p></body></html>") == []


def test_collect_page_assets_dedupes_and_drops_empty():
    assets = collect_page_assets(MEDIA_PAGE)
    assert assets.images == [
        "https://cdn.example.com/a.jpg",
        "https://cdn.example.com/b.jpg",
        "/static/logo.png",
    ]
    assert assets.download_links == ["https://dl.example.com/a.jpg"]
    assert "" not in assets.links
    assert "/faq" in assets.links


def test_probe_page_signals_counts_structure():
    forms, inputs, images = probe_page_signals(LANDING_PAGE)
    assert forms == 1
    # the text input plus the hidden input whose name contains "user"
    assert inputs == 2
    assert images == [
        "https://storiesig.info/a.png",
        "https://storiesig.info/b.png",
        "https://storiesig.info/c.png",
    ]
