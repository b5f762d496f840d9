"""Tests for the public configuration functions."""

import pytest

from mockspace import (
    ANY,
    Double,
    MockConfigurationError,
    NegativeExpectationViolatedError,
    SpaceVerificationError,
    UnexpectedMessageError,
    UnsatisfiedExpectationError,
    double,
    expect,
    find_interceptor,
    get_space,
    is_null_object,
    mark_null_object,
    received_message,
    received_message_with,
    refuse,
    reset_all,
    reset_double,
    stub_method,
    stub_methods,
    unstub,
    verify_all,
    verify_double,
)


class TestExpect:
    """Tests for expect() and refuse()."""

    def test_expect_with_return_value(self) -> None:
        mailer = Double("mailer")
        expect(mailer, "send", returns=True)
        assert mailer.send("bob@example.com") is True
        verify_double(mailer)

    def test_fluent_configuration(self) -> None:
        mailer = Double("mailer")
        expect(mailer, "send").with_args("bob", subject=ANY).and_return("sent").twice()

        assert mailer.send("bob", subject="hi") == "sent"
        assert mailer.send("bob", subject="bye") == "sent"
        verify_double(mailer)

    def test_and_call_receives_arguments(self) -> None:
        calc = Double("calc")
        expect(calc, "add").and_call(lambda a, b: a + b)
        assert calc.add(2, 3) == 5

    def test_and_raise(self) -> None:
        client = Double("client")
        expect(client, "fetch").and_raise(TimeoutError("slow"))
        with pytest.raises(TimeoutError, match="slow"):
            client.fetch()
        verify_double(client)

    def test_with_matcher_accepts_predicate(self) -> None:
        client = Double("client")
        stub_method(client, "fetch", returns="other")
        expect(client, "fetch").with_matcher(lambda url: url.startswith("https")).and_return("secure")

        assert client.fetch("http://a") == "other"
        assert client.fetch("https://a") == "secure"

    def test_origin_is_captured(self, clean_settings: None) -> None:
        mailer = Double("mailer")
        handle = expect(mailer, "send")
        assert handle.record.origin is not None
        assert handle.record.origin.split(":")[0].endswith("test_api.py")
        reset_double(mailer)

    def test_origin_capture_can_be_disabled(
        self, clean_settings: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MOCKSPACE_CAPTURE_ORIGIN", "false")
        mailer = Double("mailer")
        assert expect(mailer, "send").record.origin is None
        reset_double(mailer)

    def test_explicit_origin_wins(self) -> None:
        mailer = Double("mailer")
        handle = expect(mailer, "send", origin="spec.py:3")
        assert handle.record.origin == "spec.py:3"
        with pytest.raises(UnsatisfiedExpectationError, match="spec.py:3"):
            verify_double(mailer)
        reset_double(mailer)

    def test_refuse(self) -> None:
        mailer = Double("mailer")
        refuse(mailer, "send")
        verify_double(mailer)
        with pytest.raises(NegativeExpectationViolatedError):
            mailer.send()

    def test_never_on_expectation(self) -> None:
        mailer = Double("mailer")
        expect(mailer, "send").never()
        with pytest.raises(NegativeExpectationViolatedError):
            mailer.send()


class TestStubbing:
    """Tests for stub_method(), stub_methods() and unstub()."""

    def test_stub_method(self) -> None:
        repo = Double("repo")
        stub_method(repo, "find", returns={"id": 1})
        assert repo.find(1) == {"id": 1}
        assert repo.find(2) == {"id": 1}

    def test_stub_method_computes(self) -> None:
        repo = Double("repo")
        stub_method(repo, "find", computes=lambda user_id: {"id": user_id})
        assert repo.find(3) == {"id": 3}

    def test_stub_without_value_returns_none(self) -> None:
        repo = Double("repo")
        stub_method(repo, "find")
        assert repo.find() is None

    def test_stub_queued_values(self) -> None:
        dice = Double("dice")
        stub_method(dice, "roll").and_return(1, 6)
        assert [dice.roll() for _ in range(3)] == [1, 6, 6]

    def test_stub_methods(self) -> None:
        repo = Double("repo")
        handles = stub_methods(repo, {"count": 3, "exists": True})
        assert set(handles) == {"count", "exists"}
        assert repo.count() == 3
        assert repo.exists() is True

    def test_stub_never_affects_verify(self) -> None:
        repo = Double("repo")
        stub_method(repo, "find")
        verify_all()

    def test_unstub_then_unexpected(self) -> None:
        repo = Double("repo")
        stub_method(repo, "find", returns=1)
        unstub(repo, "find")
        with pytest.raises(UnexpectedMessageError):
            repo.find()

    def test_unstub_then_passthrough(self) -> None:
        wrapped = Double("wrapped", wraps="hello")
        stub_method(wrapped, "upper", returns="stubbed")
        assert wrapped.upper() == "stubbed"
        unstub(wrapped, "upper")
        assert wrapped.upper() == "HELLO"

    def test_unstub_unknown_subject_is_noop(self) -> None:
        unstub(object(), "anything")


class TestDoubles:
    """Tests for Double and double()."""

    def test_double_with_stubs(self) -> None:
        user = double("user", name="Ada", admin=False)
        assert user.name() == "Ada"
        assert user.admin() is False

    def test_private_names_raise_attribute_error(self) -> None:
        subject = Double("subject")
        with pytest.raises(AttributeError):
            subject._secret
        assert not hasattr(subject, "__deepcopy__")

    def test_wrapped_plain_attributes_are_read_through(self) -> None:
        class Config:
            timeout = 30

            def reload(self) -> str:
                return "reloaded"

        wrapped = Double("config", wraps=Config())
        assert wrapped.timeout == 30
        assert wrapped.reload() == "reloaded"

    def test_repr(self) -> None:
        assert repr(Double("repo")) == "<Double('repo')>"


class TestNullObject:
    """Tests for mark_null_object() and is_null_object()."""

    def test_flag_before_and_after(self) -> None:
        subject = Double("subject")
        assert not is_null_object(subject)
        assert mark_null_object(subject) is subject
        assert is_null_object(subject)
        assert subject.whatever(1).and_more() is subject

    def test_is_null_object_on_plain_object(self) -> None:
        assert not is_null_object(object())
        assert find_interceptor(object()) is None

    def test_reset_clears_flag(self) -> None:
        subject = mark_null_object(Double())
        reset_double(subject)
        assert not is_null_object(subject)


class TestReceivedMessage:
    """Tests for received_message()."""

    def test_received_message(self) -> None:
        repo = Double("repo")
        stub_method(repo, "find")
        assert not received_message(repo, "find")
        repo.find(1, deep=True)

        assert received_message(repo, "find")
        assert received_message_with(repo, "find", 1, deep=True)
        assert not received_message_with(repo, "find", 2)
        assert received_message(repo, "find", lambda user_id, deep: deep)

    def test_refused_call_is_received(self) -> None:
        repo = Double("repo")
        refuse(repo, "delete")
        with pytest.raises(NegativeExpectationViolatedError):
            repo.delete()
        assert received_message(repo, "delete")

    def test_unknown_subject(self) -> None:
        assert not received_message(object(), "find")


class TestLifecycle:
    """Tests for verify/reset helpers."""

    def test_verify_double_and_reset_double(self) -> None:
        repo = Double("repo")
        expect(repo, "save")
        with pytest.raises(UnsatisfiedExpectationError):
            verify_double(repo)
        reset_double(repo)
        verify_double(repo)

    def test_verify_unknown_subject_is_noop(self) -> None:
        verify_double(object())
        reset_double(object())

    def test_verify_all_and_reset_all(self) -> None:
        first = Double("first")
        second = Double("second")
        expect(first, "a")
        expect(second, "b")
        first.a()

        with pytest.raises(SpaceVerificationError) as exc_info:
            verify_all()
        assert len(exc_info.value.errors) == 1

        reset_all()
        assert len(get_space()) == 0
        verify_all()

    def test_invalid_count_is_reported_as_configuration_error(self) -> None:
        repo = Double("repo")
        with pytest.raises(MockConfigurationError):
            expect(repo, "save").exactly(-2)
