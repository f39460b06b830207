"""
Closed value sets: games, card conditions, currencies
"""
import enum

from tcgcollect.errors import ValidationError


class _Choice(str, enum.Enum):
    """String enum that validates raw input at the boundary"""

    @classmethod
    def values(cls):
        return [member.value for member in cls]

    @classmethod
    def parse(cls, value, message=None):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(message or f'Invalid {LABELS[cls]}. Must be one of: {", ".join(cls.values())}') from None

    def __str__(self):
        return self.value


class Game(_Choice):
    YUGIOH = 'yugioh'
    MTG = 'mtg'
    POKEMON = 'pokemon'


class Condition(_Choice):
    MINT = 'mint'
    NEAR_MINT = 'near_mint'
    LIGHT_PLAY = 'light_play'
    MODERATE_PLAY = 'moderate_play'
    HEAVY_PLAY = 'heavy_play'
    DAMAGED = 'damaged'


class Currency(_Choice):
    EUR = 'EUR'
    USD = 'USD'
    GBP = 'GBP'
    JPY = 'JPY'


LABELS = {
    Game: 'game type',
    Condition: 'card condition',
    Currency: 'currency',
}
