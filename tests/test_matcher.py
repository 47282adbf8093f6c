"""Tests for linkmap.routing.matcher — path to controller resolution."""

import pytest

from linkmap.routing.matcher import match_path, match_tokens, split_path
from linkmap.routing.pattern import parse_pattern
from linkmap.routing.registry import Registry
from linkmap.routing.spec import LinkSpec


class IndexPage:
    pass


class NewsPage:
    pass


class ProfilePage:
    pass


class SectionsPage:
    pass


class ActionPage:
    pass


@pytest.fixture
def registry() -> Registry:
    r = Registry()
    r.register(IndexPage, LinkSpec.parse("index;page/{pageIndex};index/page/{pageIndex}"))
    r.register(NewsPage, LinkSpec.parse("news"))
    r.register(ProfilePage, LinkSpec.parse("profile/{userName:Mike,Max};profiles/all"))
    r.register(
        SectionsPage,
        LinkSpec.parse("sections/{sectionId:1,2,3,01,02,03}", name="bySectionId"),
        LinkSpec.parse("sections/{sectionName}", name="bySectionName"),
    )
    r.register(ActionPage, LinkSpec.parse("action/{kind:purchase,sell}", action="trade"))
    return r


class TestSplitPath:
    def test_plain(self) -> None:
        assert split_path("/a/b") == ["a", "b"]

    def test_strips_query_and_fragment(self) -> None:
        assert split_path("/a/b?x=1#top") == ["a", "b"]
        assert split_path("/a#frag?not-a-query") == ["a"]

    def test_relative_rejected(self) -> None:
        assert split_path("a/b") is None
        assert split_path("") is None

    def test_root(self) -> None:
        assert split_path("/") == [""]

    def test_trailing_slashes_dropped(self) -> None:
        assert split_path("/news/") == ["news"]
        assert split_path("/user/7//?tab=x") == ["user", "7"]

    def test_interior_empty_sections_kept(self) -> None:
        assert split_path("/a//b") == ["a", "", "b"]


class TestMatchTokens:
    def test_binds_params(self) -> None:
        pattern = parse_pattern("LongLinkedPage/a/{a}/b/{b}/c/{c}")
        tokens = "LongLinkedPage/a/1/b/2/c/3".split("/")
        assert match_tokens(pattern, tokens) == {"a": "1", "b": "2", "c": "3"}

    def test_length_mismatch(self) -> None:
        assert match_tokens(parse_pattern("user/{id}"), ["user"]) is None

    def test_literal_mismatch(self) -> None:
        assert match_tokens(parse_pattern("user/{id}"), ["users", "1"]) is None

    def test_empty_token_never_binds(self) -> None:
        assert match_tokens(parse_pattern("user/{id}"), ["user", ""]) is None


class TestMatchPath:
    def test_literal(self, registry: Registry) -> None:
        result = match_path(registry, "/index")
        assert result is not None
        assert result.controller is IndexPage
        assert result.pattern == "index"
        assert result.params == {}

    def test_query_ignored(self, registry: Registry) -> None:
        result = match_path(registry, "/index?a=b")
        assert result is not None
        assert result.pattern == "index"

    def test_fragment_ignored(self, registry: Registry) -> None:
        result = match_path(registry, "/news#12")
        assert result is not None
        assert result.controller is NewsPage

    def test_query_and_fragment(self, registry: Registry) -> None:
        result = match_path(registry, "/news?a=1&v=2233#top")
        assert result is not None
        assert result.controller is NewsPage

    def test_param(self, registry: Registry) -> None:
        result = match_path(registry, "/page/17")
        assert result is not None
        assert result.pattern == "page/{pageIndex}"
        assert result.params == {"pageIndex": "17"}

    def test_trailing_slash(self, registry: Registry) -> None:
        news = match_path(registry, "/news/")
        assert news is not None
        assert news.controller is NewsPage

        page = match_path(registry, "/page/7/?x=1")
        assert page is not None
        assert page.params == {"pageIndex": "7"}

    def test_longer_pattern(self, registry: Registry) -> None:
        result = match_path(registry, "/index/page/17")
        assert result is not None
        assert result.pattern == "index/page/{pageIndex}"

    @pytest.mark.parametrize(
        "path",
        [
            "/index/a",
            "/profile/MikeMax",
            "/profile/%20Mike",
            "/profile/ Mike ",
            "/profiles/all/Max",
            "/profiles",
            "/profile",
            "/profile/Mike/Mirzayanov",
            "/",
            "index",
            "/news//x",
        ],
    )
    def test_no_match(self, registry: Registry, path: str) -> None:
        assert match_path(registry, path) is None

    def test_allowed_values(self, registry: Registry) -> None:
        mike = match_path(registry, "/profile/Mike")
        maxim = match_path(registry, "/profile/Max")
        assert mike is not None and mike.params == {"userName": "Mike"}
        assert maxim is not None and maxim.params == {"userName": "Max"}

    def test_action_kind(self, registry: Registry) -> None:
        assert match_path(registry, "/action/purchase") is not None
        assert match_path(registry, "/action/sell") is not None
        assert match_path(registry, "/action/rent") is None

    def test_declaration_order_within_controller(self, registry: Registry) -> None:
        by_id = match_path(registry, "/sections/01")
        by_name = match_path(registry, "/sections/11")
        assert by_id is not None and by_id.spec.name == "bySectionId"
        assert by_name is not None and by_name.spec.name == "bySectionName"

    def test_match_exposes_spec(self, registry: Registry) -> None:
        result = match_path(registry, "/action/sell")
        assert result is not None
        assert result.action == "trade"
        assert result.skip_interceptors == frozenset()

    def test_empty_registry(self) -> None:
        assert match_path(Registry(), "/anything") is None
