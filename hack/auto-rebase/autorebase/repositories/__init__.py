from .checkout_repository import CheckoutRepository
from .commits_repository import CommitsRepository
from .components_repository import ComponentRepository
from .gomod_repository import GoModRepository
from .manifest import Manifest

__all__ = [
    'CheckoutRepository',
    'CommitsRepository',
    'ComponentRepository',
    'GoModRepository',
    'Manifest',
]
