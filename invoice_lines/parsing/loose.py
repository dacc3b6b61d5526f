"""
Loose Fallback Parser.

Recovers a best-effort item from a priced line that no table layout
matched. Items found this way carry a lower confidence (0.5) than
layout matches so that reviewers look at them first.
"""

import re
from typing import Optional

from invoice_lines.utils.logger import get_logger
from .layouts import LayoutMatch, TaxPolicy, assumed_rate, DEFAULT_TAX_RATE
from .segmenter import is_non_item_line

# Initialize module logger
logger = get_logger(__name__)


LOOSE_LAYOUT_NAME = "loose"
LOOSE_CONFIDENCE = 0.5

MIN_LOOSE_LINE_LENGTH = 10
MIN_LOOSE_NAME_LENGTH = 2

AMOUNT_PATTERN = re.compile(r'\$?(\d+\.\d{2})')
WORD_PATTERN = re.compile(r'[A-Za-z]{3,}')

# A number standing on its own: "2", "1.5". Sizes such as "250g" and
# money such as "$9.00" are not standalone.
STANDALONE_NUMBER = re.compile(r'(?<![\w.$€£])(\d+(?:\.\d+)?)(?![\w.])')
NAME_BOUNDARY = re.compile(r'[$€£]|(?<![\w.])\d+(?:\.\d+)?(?![\w.])')

NAME_PUNCTUATION = ' \t.:;,-|*'


def looks_like_line_item(line: str) -> bool:
    """
    Check whether an unmatched line is still worth a loose parse.

    A candidate is longer than 10 characters, holds an NN.NN amount and
    a run of at least three letters, and is not a total or note line.

    Example:
        >>> looks_like_line_item("Raw Cacao Powder 250g .... 2 $9.00")
        True
        >>> looks_like_line_item("Freight $12.00 flat rate")
        False
    """
    return (
        len(line) > MIN_LOOSE_LINE_LENGTH
        and AMOUNT_PATTERN.search(line) is not None
        and WORD_PATTERN.search(line) is not None
        and not is_non_item_line(line)
    )


class LooseLineParser:
    """
    Heuristic parser for priced lines outside every known layout.

    Exposes the same surface as a LayoutDescriptor (name, try_match,
    tax_policy, confidence) so the extractor can treat it as the last
    step of the cascade.

    Extraction:
        - unit price: the last NN.NN amount on the line
        - name: text before the first standalone number or currency sign
          (or, for lines that open with a quantity, the text after it)
        - quantity: the first standalone number other than the price;
          1 when there is none
        - tax: the standard rate on price * quantity

    Example:
        >>> parser = LooseLineParser()
        >>> match = parser.try_match("Raw Cacao Powder 250g .... 2 $9.00")
        >>> match.description, match.quantity, match.unit_price
        ('Raw Cacao Powder 250g', 2.0, 9.0)
    """

    name = LOOSE_LAYOUT_NAME
    confidence = LOOSE_CONFIDENCE

    def __init__(self, default_tax_rate: float = DEFAULT_TAX_RATE):
        self.tax_policy: TaxPolicy = assumed_rate(default_tax_rate)

    def try_match(self, line: str) -> Optional[LayoutMatch]:
        """
        Parse a line loosely.

        Returns:
            LayoutMatch tagged "loose", or None when the line does not
            look like an item or no usable name can be recovered.
        """
        if not looks_like_line_item(line):
            return None

        amounts = list(AMOUNT_PATTERN.finditer(line))
        price_match = amounts[-1]
        unit_price = float(price_match.group(1))

        description = self._extract_name(line)
        if len(description) < MIN_LOOSE_NAME_LENGTH:
            logger.debug(f"Loose parse found no name in {line!r}")
            return None

        quantity = self._extract_quantity(line, price_match.span(1))

        return LayoutMatch(
            layout=self.name,
            description=description,
            quantity=quantity,
            unit_price=unit_price,
        )

    def _extract_name(self, line: str) -> str:
        boundary = NAME_BOUNDARY.search(line)
        if boundary is None:
            return line.strip(NAME_PUNCTUATION)

        name = line[:boundary.start()].strip(NAME_PUNCTUATION)
        if len(name) >= MIN_LOOSE_NAME_LENGTH:
            return name

        # "2 Raw Cacao Powder ... $9.00": the name follows the quantity
        rest = line[boundary.end():]
        next_boundary = NAME_BOUNDARY.search(rest)
        if next_boundary is not None:
            rest = rest[:next_boundary.start()]
        return rest.strip(NAME_PUNCTUATION)

    @staticmethod
    def _extract_quantity(line: str, price_span) -> float:
        for candidate in STANDALONE_NUMBER.finditer(line):
            if candidate.span(1) == price_span:
                continue

            quantity = float(candidate.group(1))
            return quantity if quantity > 0 else 1.0

        return 1.0
