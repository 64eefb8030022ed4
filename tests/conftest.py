import pytest

from redemption_wizard.messages import MessageCatalog

from helpers.factories import build_controller, build_machine


@pytest.fixture(scope="session")
def catalog():
    """Load the pt_BR catalog once for the entire test session."""
    return MessageCatalog().load()


@pytest.fixture
def wiring(catalog):
    """(machine, simulator, scheduler) on a fresh virtual clock."""
    return build_machine(catalog=catalog)


@pytest.fixture
def machine(wiring):
    return wiring[0]


@pytest.fixture
def scheduler(wiring):
    return wiring[2]


@pytest.fixture
def session(machine):
    return machine.create_session()


@pytest.fixture
def controller():
    """(WizardController, ManualScheduler) pair."""
    return build_controller()
