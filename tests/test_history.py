"""Tests for wren.history — session history and location."""

from wren.history import History, PopStateEvent


class TestHistory:
    def test_initial(self) -> None:
        history = History("https://garber.test", "/work/")
        assert history.path == "/work/"
        assert history.location.pathname == "/work/"
        assert history.location.href == "https://garber.test/work/"

    def test_full_url_reduced_to_path(self) -> None:
        assert History(path="https://garber.test/about/?x=1").path == "/about/"

    def test_push_does_not_pop(self) -> None:
        history = History()
        events: list[PopStateEvent] = []
        history.add_popstate_listener(events.append)
        history.push_state("/about/")
        assert history.path == "/about/"
        assert events == []

    def test_back_and_forward(self) -> None:
        history = History(path="/")
        events: list[PopStateEvent] = []
        history.add_popstate_listener(events.append)
        history.push_state("/about/")
        history.push_state("/some-project/", {"tile": 1})

        assert history.back() is True
        assert history.path == "/about/"
        assert history.forward() is True
        assert [e.path for e in events] == ["/about/", "/some-project/"]
        assert events[-1].state == {"tile": 1}

    def test_out_of_range(self) -> None:
        history = History()
        assert history.back() is False
        assert history.forward() is False
        assert history.go(0) is False

    def test_push_truncates_forward(self) -> None:
        history = History(path="/")
        history.push_state("/a/")
        history.push_state("/b/")
        history.back()
        history.push_state("/c/")
        assert len(history) == 3
        assert history.forward() is False

    def test_replace(self) -> None:
        history = History(path="/")
        history.replace_state("/x/")
        assert history.path == "/x/"
        assert len(history) == 1


class TestLocation:
    def test_assign_records_hard_navigation(self) -> None:
        history = History("https://garber.test/", "/work/")
        history.location.assign("https://garber.test")
        assert history.location.hard_navigations == ["https://garber.test"]
        assert history.location.href == "https://garber.test"
        assert history.location.origin == "https://garber.test"
