import logging
import random
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

LOWERCASE_DATA = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE_DATA = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
SYMBOLS_DATA = "!@#$%^&*()_+-={}[]\":;'?><,./~`|\\"
NUMBERS_DATA = "1234567890"

DEFAULT_LENGTH = 8

class CharacterClass(Enum):
    # Definition order is the order in which alphabets enter the pool.
    LOWERCASE = (LOWERCASE_DATA, "a-z")
    UPPERCASE = (UPPERCASE_DATA, "A-Z")
    SYMBOLS = (SYMBOLS_DATA, "symbols")
    NUMBERS = (NUMBERS_DATA, "0-9")

    @property
    def alphabet(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

class PasswordGenerationError(Enum):
    MISSING_CONTENT = "missing possible password contents"
    ZERO_LENGTH_PASSWORD = "password must be more than 0 elements"

class PasswordGenerationException(Exception):
    def __init__(self, error: PasswordGenerationError):
        self.error = error

    def __str__(self):
        return self.error.value

class GeneratorConsumedException(RuntimeError):
    pass


class PasswordGenerator:
    """
    Builder for random passwords. Enable character classes and set the length
    with chained calls, then call generate() once::

        pw = PasswordGenerator().enable_lowercase().set_length(20).generate()

    generate() consumes the generator. Afterwards, every further call raises
    GeneratorConsumedException.
    """

    def __init__(self, rng=None):
        """
        Args:
            rng: Random source with a randrange(n) method returning a uniformly
                random integer in [0, n). Defaults to a private
                random.SystemRandom instance.
        """
        if rng is None:
            rng = random.SystemRandom()
        self.rng = rng
        self._contents = set()
        self._length = DEFAULT_LENGTH
        self._consumed = False

    def _check_not_consumed(self):
        if self._consumed:
            raise GeneratorConsumedException("PasswordGenerator was already consumed by generate().")

    @property
    def contents(self) -> frozenset:
        return frozenset(self._contents)

    @property
    def length(self) -> Optional[int]:
        """Configured length, or None if it is unset / invalid."""
        return self._length

    def enable(self, *classes: CharacterClass) -> "PasswordGenerator":
        self._check_not_consumed()
        for char_class in classes:
            self._contents.add(CharacterClass(char_class))
        return self

    def enable_lowercase(self) -> "PasswordGenerator":
        return self.enable(CharacterClass.LOWERCASE)

    def enable_uppercase(self) -> "PasswordGenerator":
        return self.enable(CharacterClass.UPPERCASE)

    def enable_symbols(self) -> "PasswordGenerator":
        return self.enable(CharacterClass.SYMBOLS)

    def enable_numbers(self) -> "PasswordGenerator":
        return self.enable(CharacterClass.NUMBERS)

    def set_length(self, length: int) -> "PasswordGenerator":
        """
        Zero or negative lengths are not clamped. They are stored as invalid
        (None) and reported by generate().
        """
        self._check_not_consumed()
        self._length = length if length > 0 else None
        return self

    def groups(self) -> list[CharacterClass]:
        return [c for c in CharacterClass if c in self._contents]

    def pool(self) -> str:
        return "".join(c.alphabet for c in self.groups())

    def describe(self) -> str:
        ingredients = ", ".join(c.label for c in self.groups())
        if self._length is None:
            return f"invalid length, including {ingredients or 'nothing'}"
        return f"{self._length} characters including {ingredients or 'nothing'}"

    def generate(self) -> str:
        """
        Returns:
            Generated password string.

        Raises:
            PasswordGenerationException: ZERO_LENGTH_PASSWORD if the length is
                unset, else MISSING_CONTENT if no character class is enabled.
            GeneratorConsumedException: generate() was already called.
        """
        self._check_not_consumed()
        self._consumed = True

        if self._length is None:
            raise PasswordGenerationException(PasswordGenerationError.ZERO_LENGTH_PASSWORD)

        logger.debug("Contents: %s", [c.name for c in self.groups()])
        if not self._contents:
            raise PasswordGenerationException(PasswordGenerationError.MISSING_CONTENT)

        for char_class in self.groups():
            logger.debug("Adding %s to dictionary.", char_class.name.lower())
        dictionary = self.pool()
        pw = [dictionary[self.rng.randrange(len(dictionary))] for _ in range(self._length)]

        assert len(pw) == self._length

        return "".join(pw)

    @classmethod
    def from_template(cls, template: str = "Aaaaaaaaaaaaaa5", rng=None):
        """
        Returns PasswordGenerator configured to generate passwords alike the
        specified template string.

        Args:
            template: String like "Aaaaaa!aaaaaaa5" that instructs the function
                which types of characters (lowercase, uppercase, numbers, symbols)
                may appear in the password and how long the password should
                be. How often a character type occurs in the template does not
                matter, and it is not guaranteed to occur in the password.
            rng: Random source, see __init__.

        Returns:
            PasswordGenerator instance.
        """
        gen = cls(rng=rng)

        for c in template:
            for char_class in CharacterClass:
                if c in char_class.alphabet:
                    gen.enable(char_class)
                    break
            else:
                raise ValueError(f"template string contains unknown character {c!r}.")

        return gen.set_length(len(template))
