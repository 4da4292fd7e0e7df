import pytest

from slot_scheduler.defaults import DEFAULT_SCHEDULE_SLOTS


class FakeProvider:
    name = "fake"
    model = "fake-model"

    def __init__(self, response_text: str):
        self._response_text = response_text
        self.calls = []

    def generate(self, *, system: str, user: str, model=None) -> str:
        self.calls.append({"system": system, "user": user, "model": model})
        return self._response_text


class FailingProvider:
    name = "broken"
    model = "broken-model"

    def __init__(self):
        self.calls = 0

    def generate(self, *, system: str, user: str, model=None) -> str:
        self.calls += 1
        raise RuntimeError("provider down")


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str):
        return FakeProvider(response_text)
    return _make


@pytest.fixture
def failing_provider():
    return FailingProvider()


@pytest.fixture
def default_slots():
    return list(DEFAULT_SCHEDULE_SLOTS)


@pytest.fixture
def fake_classifier():
    """Classifier collaborator that records prompts and replies with fixed text."""
    def _make(reply: str):
        prompts = []

        def classify(prompt: str) -> str:
            prompts.append(prompt)
            return reply

        classify.prompts = prompts
        return classify
    return _make
