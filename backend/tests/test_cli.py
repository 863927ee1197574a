"""
Tests for the back-office CLI commands.
"""

from contextlib import contextmanager

import pytest
from sqlalchemy import select
from typer.testing import CliRunner

import cli
from rest_api.models import Category, Product, Supplier

runner = CliRunner()


@pytest.fixture
def cli_db(db_session, monkeypatch):
    """Point the CLI at the test session."""
    @contextmanager
    def _context():
        yield db_session

    monkeypatch.setattr(cli, "get_db_context", _context)
    return db_session


def test_category_visibility_hides_branch(cli_db, category_tree):
    result = runner.invoke(cli.app, ["category-visibility", str(category_tree["shoes"].id), "--hide"])

    assert result.exit_code == 0
    assert "Products updated" in result.output
    sneakers = cli_db.get(Category, category_tree["sneakers"].id)
    assert sneakers.is_active is False
    assert sneakers.updated_by_email == cli.CLI_AUDIT_EMAIL


def test_category_visibility_without_cascade(cli_db, category_tree):
    result = runner.invoke(
        cli.app,
        ["category-visibility", str(category_tree["shoes"].id), "--hide", "--no-cascade"],
    )

    assert result.exit_code == 0
    assert cli_db.get(Category, category_tree["sneakers"].id).is_active is True


def test_unknown_category_exits_with_error(cli_db):
    result = runner.invoke(cli.app, ["category-visibility", "999"])
    assert result.exit_code == 1


def test_supplier_deactivate(cli_db, seed_supplier, category_tree):
    result = runner.invoke(cli.app, ["supplier-deactivate", str(seed_supplier.id)])

    assert result.exit_code == 0
    assert cli_db.get(Supplier, seed_supplier.id).is_active is False
    assert cli_db.scalars(select(Product).where(Product.is_active.is_(True))).all() == []


def test_db_seed_refuses_production(monkeypatch):
    monkeypatch.setattr(cli.settings, "environment", "production")
    result = runner.invoke(cli.app, ["db-seed"])
    assert result.exit_code == 1


def test_version():
    result = runner.invoke(cli.app, ["version"])
    assert result.exit_code == 0
    assert "Storefront Version" in result.output
