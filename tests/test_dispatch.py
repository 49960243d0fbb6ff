"""Tests for wordchain.routing: matching, tree validation, lifecycle order."""

import pytest

from wordchain.errors import LifecycleError, RouteConfigurationError
from wordchain.routing import (
    WILDCARD,
    RouteNode,
    bootstrap,
    format_tree,
    match,
    shutdown,
    validate_tree,
    walk,
)
from wordchain.routing.dispatch import split_path


class Recording(RouteNode):
    """Node that records its lifecycle calls into a shared log."""

    def __init__(self, name: str, log: list[str], children=(), *, fail_up=False, fail_down=False):
        super().__init__(children, name=name)
        self.log = log
        self.fail_up = fail_up
        self.fail_down = fail_down

    async def up(self) -> None:
        self.log.append(f"up:{self.name}")
        if self.fail_up:
            raise RuntimeError(f"{self.name} cannot start")

    async def down(self) -> None:
        self.log.append(f"down:{self.name}")
        if self.fail_down:
            raise RuntimeError(f"{self.name} cannot stop")


def _service_tree() -> tuple[RouteNode, RouteNode, RouteNode, RouteNode]:
    info = RouteNode(name=WILDCARD)
    account = RouteNode([info], name="account")
    login = RouteNode(name="login")
    root = RouteNode([account, login])
    return root, account, info, login


class TestSplitPath:
    @pytest.mark.parametrize(
        ("path", "pieces"),
        [
            ("/", []),
            ("", []),
            ("/account", ["account"]),
            ("/account/", ["account"]),
            ("//account//99", ["account", "99"]),
        ],
    )
    def test_drops_empty_pieces(self, path: str, pieces: list[str]) -> None:
        assert split_path(path) == pieces


class TestMatch:
    def test_root(self) -> None:
        root, *_ = _service_tree()
        found = match("/", root)
        assert found is not None
        assert found.node is root
        assert found.segment is None

    def test_exact_child(self) -> None:
        root, account, _, _ = _service_tree()
        found = match("/account", root)
        assert found is not None
        assert found.node is account
        assert found.segment == "account"

    def test_wildcard_captures_segment(self) -> None:
        root, _, info, _ = _service_tree()
        found = match("/account/99", root)
        assert found is not None
        assert found.node is info
        assert found.segment == "99"

    def test_unknown_top_level(self) -> None:
        root, *_ = _service_tree()
        assert match("/unknown", root) is None

    def test_too_deep(self) -> None:
        root, *_ = _service_tree()
        assert match("/account/99/extra", root) is None
        assert match("/login/x", root) is None

    def test_exact_beats_wildcard(self) -> None:
        me = RouteNode(name="me")
        anyone = RouteNode(name=WILDCARD)
        root = RouteNode([RouteNode([anyone, me], name="users")])
        assert match("/users/me", root).node is me  # type: ignore[union-attr]
        assert match("/users/you", root).node is anyone  # type: ignore[union-attr]

    def test_trailing_slash(self) -> None:
        root, account, _, _ = _service_tree()
        assert match("/account/", root).node is account  # type: ignore[union-attr]


class TestValidateTree:
    def test_accepts_service_tree(self) -> None:
        root, *_ = _service_tree()
        validate_tree(root)

    def test_duplicate_names(self) -> None:
        root = RouteNode([RouteNode(name="a"), RouteNode(name="a")])
        with pytest.raises(RouteConfigurationError, match="more than one child named 'a'"):
            validate_tree(root)

    def test_two_wildcards(self) -> None:
        inner = RouteNode([RouteNode(name=WILDCARD), RouteNode(name=WILDCARD)], name="x")
        with pytest.raises(RouteConfigurationError, match="wildcard"):
            validate_tree(RouteNode([inner]))

    def test_empty_child_name(self) -> None:
        with pytest.raises(RouteConfigurationError, match="empty name"):
            validate_tree(RouteNode([RouteNode()]))


class TestLifecycle:
    def _tree(self, log: list[str], **fail: str) -> RouteNode:
        def node(name: str, children=()) -> Recording:
            return Recording(
                name,
                log,
                children,
                fail_up=fail.get("up") == name,
                fail_down=fail.get("down") == name,
            )

        return node("root", [node("a", [node("a1"), node("a2")]), node("b")])

    def test_walk_is_preorder(self) -> None:
        log: list[str] = []
        assert [n.name for n in walk(self._tree(log))] == ["root", "a", "a1", "a2", "b"]

    async def test_bootstrap_preorder(self) -> None:
        log: list[str] = []
        await bootstrap(self._tree(log))
        assert log == ["up:root", "up:a", "up:a1", "up:a2", "up:b"]

    async def test_bootstrap_stops_at_first_failure(self) -> None:
        log: list[str] = []
        with pytest.raises(LifecycleError) as info:
            await bootstrap(self._tree(log, up="a1"))
        assert log == ["up:root", "up:a", "up:a1"]
        assert info.value.node == "a1"
        assert isinstance(info.value.cause, RuntimeError)
        # no rollback of nodes already up
        assert not any(entry.startswith("down:") for entry in log)

    async def test_shutdown_preorder(self) -> None:
        log: list[str] = []
        assert await shutdown(self._tree(log)) is None
        assert log == ["down:root", "down:a", "down:a1", "down:a2", "down:b"]

    async def test_shutdown_returns_first_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        log: list[str] = []
        failure = await shutdown(self._tree(log, down="a"))
        assert isinstance(failure, RuntimeError)
        assert log == ["down:root", "down:a"]
        assert "down hook of route 'a' failed" in caplog.text


class TestFormatTree:
    def test_lists_paths(self) -> None:
        root, *_ = _service_tree()
        paths = [line.split()[0] for line in format_tree(root)]
        assert paths == ["/", "/account", "/account/*", "/login"]
