"""Default prompt for receipt extraction.

Keeping the prompt in a central location makes it easier to iterate on
its content and keeps the wording in step with the schema that
``receipt_extractor.services.schema_validator`` enforces.
"""

from __future__ import annotations

from textwrap import dedent


def get_default_extraction_prompt() -> str:
    """Return the instruction sent to the model alongside the receipt image.

    The prompt spells out the exact JSON shape and the extraction rules
    (date format, currency code, numeric amounts, meaning of tax, total
    and item cost).  It asks for the JSON object only, although replies
    are still run through the sanitizer because models do not always
    comply.
    """
    return dedent(
        """
        Analyze this receipt image and extract the following information in JSON format:

        {
          "date": "YYYY-MM-DD format",
          "currency": "3-character currency code (e.g., USD, EUR, CAD)",
          "vendor_name": "Name of the store/vendor",
          "receipt_items": [
            {
              "item_name": "Name of the item",
              "item_cost": 0.00
            }
          ],
          "tax": 0.00,
          "total": 0.00
        }

        Please ensure:
        1. The date is in YYYY-MM-DD format
        2. Currency is a valid 3-character code
        3. All monetary values are numbers (not strings)
        4. Tax is the total GST/tax amount for the entire receipt
        5. Total is the final amount paid
        6. Item costs should be individual item prices before tax

        Return only the JSON object, no additional text.
        """
    ).strip()
