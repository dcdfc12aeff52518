from docfill.letters.base import BaseLetter
from docfill.letters.collection import CollectionLetter
from docfill.letters.fields import ClientFields, TitleRow, parse_titles
from docfill.letters.notification import NotificationLetter

__all__ = [
    "BaseLetter",
    "ClientFields",
    "CollectionLetter",
    "NotificationLetter",
    "TitleRow",
    "parse_titles",
]
