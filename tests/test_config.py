import pytest

from geofigures import FigureRegistry
from geofigures.config import RegistryOptions, get_registry_options, set_registry_options


@pytest.fixture
def restore_options():
    saved = get_registry_options()
    yield
    set_registry_options(saved)


def test_defaults():
    options = RegistryOptions()
    assert options.max_workers == 1
    assert options.fallback_name == 'Figure'


def test_get_returns_copy(restore_options):
    options = get_registry_options()
    options.fallback_name = 'Changed'
    assert get_registry_options().fallback_name == 'Figure'


def test_registry_uses_process_defaults(restore_options):
    set_registry_options(RegistryOptions(fallback_name='Shape', max_workers=2))
    registry = FigureRegistry()
    assert registry.options.fallback_name == 'Shape'
    assert registry.options.max_workers == 2


def test_max_workers_must_be_positive():
    with pytest.raises(ValueError):
        RegistryOptions(max_workers=0)
