"""Tests for the environment adapters."""

from kepixel.adapters.environment.fake import FakeEnvironment
from kepixel.adapters.environment.null import NullEnvironment
from kepixel.core.protocols.environment import EnvironmentObserver
from kepixel.schemas.dom import ActivityKind, DomElement, VisibilityState


class TestFakeEnvironment:
    def test_satisfies_protocol(self):
        assert isinstance(FakeEnvironment(), EnvironmentObserver)

    def test_visibility_change_notifies_handlers(self):
        env = FakeEnvironment()
        seen = []
        env.on_visibility_change(seen.append)

        env.set_visibility(VisibilityState.HIDDEN)

        assert seen == [VisibilityState.HIDDEN]
        assert env.visibility_state == VisibilityState.HIDDEN

    def test_unsubscribe_detaches_handler(self):
        env = FakeEnvironment()
        seen = []
        unsubscribe = env.on_user_activity(seen.append)

        env.emit_activity(ActivityKind.SCROLL)
        unsubscribe()
        unsubscribe()
        env.emit_activity(ActivityKind.SCROLL)

        assert seen == [ActivityKind.SCROLL]
        assert env.handler_count == 0

    def test_click_wraps_target(self):
        env = FakeEnvironment()
        events = []
        env.on_element_activation(events.append)
        anchor = DomElement("A", {"href": "/x"})

        env.click(anchor)

        assert events[0].target is anchor


class TestNullEnvironment:
    def test_satisfies_protocol(self):
        assert isinstance(NullEnvironment(), EnvironmentObserver)

    def test_is_hidden_without_host(self):
        env = NullEnvironment()
        assert env.visibility_state == VisibilityState.HIDDEN
        assert env.page_host is None

    def test_subscriptions_are_noops(self):
        env = NullEnvironment()
        unsubscribe = env.on_element_activation(lambda event: None)
        assert unsubscribe() is None
