from __future__ import annotations

import unittest
from dataclasses import dataclass, field
from typing import List, Optional

from lite_orm.core.metadata import build_model_metadata, get_model_metadata
from lite_orm.core.models import pk_fields, row_to_model, table_name


@dataclass
class Account:
    id: Optional[int] = field(default=None, metadata={"pk": True})
    email: str = ""
    active: bool = True


@dataclass
class Invoice:
    number: str = field(default="", metadata={"pk": True})
    total: float = 0.0

    __table__ = "billing_invoices"


@dataclass
class Ticket:
    id: int = field(metadata={"pk": True})
    title: str
    tags: List[str] = field(default_factory=list)
    status: str = "open"
    summary: str = field(default="", init=False)


@dataclass
class NoPk:
    name: str = ""


@dataclass
class TwoPks:
    a: int = field(default=0, metadata={"pk": True})
    b: int = field(default=0, metadata={"pk": True})


class PlainModel:
    pass


class ModelHelperTests(unittest.TestCase):
    def test_table_name(self) -> None:
        self.assertEqual(table_name(Account), "account")
        self.assertEqual(table_name(Account()), "account")
        self.assertEqual(table_name(Invoice), "billing_invoices")

    def test_pk_fields(self) -> None:
        self.assertEqual([f.name for f in pk_fields(Account)], ["id"])
        with self.assertRaises(ValueError):
            pk_fields(NoPk)
        with self.assertRaises(TypeError):
            pk_fields(PlainModel)  # type: ignore[arg-type]

    def test_row_to_model_ignores_unknown_keys(self) -> None:
        account = row_to_model(Account, {"id": 7, "email": "a@x.com", "rowid": 7})
        self.assertEqual(account, Account(id=7, email="a@x.com", active=True))

    def test_row_to_model_uses_defaults_for_missing_columns(self) -> None:
        self.assertEqual(row_to_model(Account, {"id": 1}), Account(id=1))

    def test_row_to_model_fills_fields_without_defaults(self) -> None:
        ticket = row_to_model(Ticket, {"title": "Broken build"})
        self.assertIsNone(ticket.id)
        self.assertEqual(ticket.title, "Broken build")
        self.assertEqual(ticket.tags, [])
        self.assertEqual(ticket.status, "open")
        self.assertEqual(ticket.summary, "")

        other = row_to_model(Ticket, {"id": 2})
        self.assertIsNone(other.title)
        self.assertIsNot(other.tags, ticket.tags)

    def test_row_to_model_skips_non_init_fields(self) -> None:
        ticket = row_to_model(Ticket, {"id": 1, "title": "t", "summary": "ignored"})
        self.assertEqual(ticket.summary, "")


class ModelMetadataTests(unittest.TestCase):
    def test_build_metadata(self) -> None:
        meta = build_model_metadata(Invoice)
        self.assertIs(meta.model, Invoice)
        self.assertEqual(meta.table, "billing_invoices")
        self.assertEqual(meta.pk, "number")
        self.assertEqual(meta.columns, ("number", "total"))

    def test_requires_exactly_one_pk(self) -> None:
        with self.assertRaises(ValueError):
            build_model_metadata(TwoPks)
        with self.assertRaises(ValueError):
            build_model_metadata(NoPk)

    def test_metadata_is_cached_per_type(self) -> None:
        self.assertIs(get_model_metadata(Account), get_model_metadata(Account))
        self.assertIsNot(get_model_metadata(Account), get_model_metadata(Invoice))


if __name__ == "__main__":
    unittest.main()
