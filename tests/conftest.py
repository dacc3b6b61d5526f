"""
Shared fixtures: sample OCR texts for each supplier layout and a
configuration reset.
"""

import pytest

from config import ConfigurationManager


# Code, description, ordered, supplied, unit, price, tax rate, tax, total
TRUMPS_TEXT = """\
Trumps Pty Ltd
TAX INVOICE
Invoice No. : 448812
Date: 05/03/2025
Code Description Ord Sup Unit Price Tax Rate Tax Total
TR1001 Organic Kale Bunch 6 6 EA $3.20 10 $1.92 $21.12
TR2002 Rice Malt Syrup 2 2 EA $5.00 0 $0.00 $10.00
TR3003 Coconut Water 12pk 1 1 CTN $24.00 10 $2.40 $26.40
Subtotal $55.20
GST $4.32
Total $59.52
"""

# Code, description, ordered, supplied, unit, price/unit, total
HARVEST_TEXT = """\
Harvest Wholefoods
Invoice Number: 20931
Date 2025/02/14
Item Description Ord Sup Unit Price Total
10442 Carrots Organic 5 5 KG 3.80/KG 19.00
10518 Bananas Cavendish 3 3 KG 4.20/KG 12.60
Total 31.60
"""

# Qty, item no, description, price, extended, indicator
LITTLE_VALLEY_TEXT = """\
Little Valley Distribution
TAX INVOICE 7781234
Date: 12 Mar 2025
QTY ITEM NO DESCRIPTION PRICE EXTENDED
1 ABC123 Organic Honey 500g $12.50 $12.50 TAX-FREE
2 LV2210 Tamari Sauce 250ml $6.95 $13.90 GST
3 LV3301 Rolled Oats 1kg $4.40 $13.20 TAXED
Subtotal $39.60
"""

# One generic row and one row only the loose parser can read
MIXED_TEXT = """\
Green Pantry Co
Invoice # 55120
Date: 01/04/2025
Description Qty Price
Raw Cacao Powder 250g .... 2 $9.00
Organic Kale Bunch 6 $3.20 $19.20
Thank you for your business
"""

ROSTER_TEXT = """\
Weekly Staff Roster
Monday: Sam (Barista) 7am-3pm
Tuesday: Alex (Kitchen) 9am-5pm
Shift manager: Jo
Total hours: 16
"""

FAILED_TEXT = """\
Acme Supplies
Invoice No: 1234
Thanks
"""


@pytest.fixture
def trumps_text():
    return TRUMPS_TEXT


@pytest.fixture
def harvest_text():
    return HARVEST_TEXT


@pytest.fixture
def little_valley_text():
    return LITTLE_VALLEY_TEXT


@pytest.fixture
def mixed_text():
    return MIXED_TEXT


@pytest.fixture
def roster_text():
    return ROSTER_TEXT


@pytest.fixture
def failed_text():
    return FAILED_TEXT


@pytest.fixture
def reset_config():
    """Drop the configuration singleton before and after a test."""
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()
