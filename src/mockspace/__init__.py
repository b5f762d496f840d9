"""mockspace - expectation and stub engine for test doubles.

Attach expectations and stubs to Doubles or to plain objects, exercise
the code under test, then verify and reset every double at once.

Usage:
    from mockspace import Double, expect, refuse, stub_chain, verify_all, reset_all

    def test_checkout():
        gateway = Double("gateway")
        expect(gateway, "charge").with_args(100).and_return("ok")
        refuse(gateway, "refund")
        stub_chain(gateway, "config.currency", "EUR")

        assert checkout(gateway, 100) == "ok"
        verify_all()
        reset_all()

With pytest, use the ``mock_space`` fixture from ``mockspace.pytest_plugin``
to get verify and reset around every test.
"""

from mockspace.api import (
    caller_location,
    expect,
    is_null_object,
    mark_null_object,
    received_message,
    received_message_with,
    refuse,
    reset_all,
    reset_double,
    stub_chain,
    stub_method,
    stub_methods,
    unstub,
    verify_all,
    verify_double,
)
from mockspace.chain import ChainResolver, normalize_chain
from mockspace.config import MockspaceSettings, clear_settings_cache, get_settings
from mockspace.doubles import Double, double
from mockspace.exceptions import (
    ChainConfigurationError,
    MockConfigurationError,
    MockExpectationError,
    MockspaceError,
    NegativeExpectationViolatedError,
    SpaceVerificationError,
    UnexpectedMessageError,
    UnsatisfiedExpectationError,
)
from mockspace.interceptor import Interceptor, attach, find_interceptor
from mockspace.matchers import ANY, any_args, instance_of, predicate
from mockspace.models import CountRange, ExpectationFailure, ReceivedCall
from mockspace.records import ExpectationHandle, StubHandle
from mockspace.space import Space, get_space, set_space, use_space

__all__ = [
    # Doubles
    "Double",
    "double",
    # Configuration
    "expect",
    "refuse",
    "stub_method",
    "stub_methods",
    "unstub",
    "stub_chain",
    "mark_null_object",
    "is_null_object",
    "received_message",
    "received_message_with",
    "caller_location",
    "ExpectationHandle",
    "StubHandle",
    # Matchers
    "ANY",
    "any_args",
    "instance_of",
    "predicate",
    # Lifecycle
    "verify_double",
    "reset_double",
    "verify_all",
    "reset_all",
    "Space",
    "get_space",
    "set_space",
    "use_space",
    # Engine
    "Interceptor",
    "attach",
    "find_interceptor",
    "ChainResolver",
    "normalize_chain",
    "CountRange",
    "ExpectationFailure",
    "ReceivedCall",
    # Settings
    "MockspaceSettings",
    "get_settings",
    "clear_settings_cache",
    # Errors
    "MockspaceError",
    "MockConfigurationError",
    "ChainConfigurationError",
    "MockExpectationError",
    "UnexpectedMessageError",
    "NegativeExpectationViolatedError",
    "UnsatisfiedExpectationError",
    "SpaceVerificationError",
]
