"""Test factories for generating test data."""

from polyfactory.factories import DataclassFactory
from polyfactory.factories.pydantic_factory import ModelFactory

from nunit_event_listener.config import ListenerConfig
from nunit_event_listener.models.result import TestResult


class TestResultFactory(DataclassFactory[TestResult]):
    """Factory for TestResult."""

    __model__ = TestResult

    failure_message = None
    stack_trace = None
    description = None


class ListenerConfigFactory(ModelFactory[ListenerConfig]):
    """Factory for ListenerConfig."""

    log_path = None
    completion_timeout = 0
