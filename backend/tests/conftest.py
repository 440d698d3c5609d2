"""Shared fixtures for highlight pipeline tests."""
import pytest


def build_segments(texts, seconds_each=3.0):
    """One segment per text, back to back."""
    return [
        {"text": text, "start": i * seconds_each, "duration": seconds_each}
        for i, text in enumerate(texts)
    ]


@pytest.fixture
def make_segments():
    return build_segments


@pytest.fixture
def viral_segments():
    """20 one-sentence segments of 3s each (60s total)."""
    texts = [
        "Most people start their morning the wrong way.",
        "I tracked my habits for a full year.",
        "What I found completely changed my routine.",
        "The first thing I noticed was my phone.",
        "Checking email in bed drained my focus.",
        "So I moved my charger into the kitchen.",
        "Within two weeks my mornings felt calmer.",
        "Here is the biggest secret nobody tells you!",
        "Your first hour decides the rest of the day.",
        "I started writing three priorities on paper.",
        "Then I went for a short walk outside.",
        "Sunlight early in the day resets your clock.",
        "My energy in the afternoon stopped crashing.",
        "Why does this simple habit work so well?",
        "Because attention is a limited resource.",
        "Every notification spends a little of it.",
        "Protect the morning and the day gets easier.",
        "Try this for seven days and track the results.",
        "You will be surprised how much you get done.",
        "Let me know how it goes in the comments.",
    ]
    return build_segments(texts)
