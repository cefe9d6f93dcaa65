import pytest

from MultiCalc import Calculator


def press(calculator, *tokens):
    """Feed tokens one by one, return the last response."""
    response = None
    for token in tokens:
        response = calculator.handle_button_click(token)
    return response


@pytest.fixture
def standard():
    # settings={} keeps the tests away from the real config.json
    return Calculator.StandardCalculator(settings={})


@pytest.fixture
def scientific():
    return Calculator.ScientificCalculator(settings={})


@pytest.fixture
def programmer():
    return Calculator.ProgrammerCalculator(settings={})
