from dataclasses import FrozenInstanceError, replace
from decimal import Decimal

import pytest

from backoffice.catalog import MenuCatalog, draft_from_form, form_from_item, parse_price, parse_token_list
from backoffice.errors import Forbidden, NotFound, ValidationError
from backoffice.models import MenuItem, MenuItemDraft, MenuItemForm


def _draft(**overrides) -> MenuItemDraft:
    fields = dict(
        name="Mushroom Risotto",
        category="Mains",
        price=Decimal("15.50"),
        description="Arborio rice with wild mushrooms",
        tags=["vegetarian"],
        available=True,
        ingredients=["arborio", "mushrooms", "parmesan"],
    )
    fields.update(overrides)
    return MenuItemDraft(**fields)


class TestParseTokenList:
    """Comma separated tag and ingredient text"""

    def test_drops_empty_tokens_and_trims(self):
        assert parse_token_list(" vegan,  , spicy ") == ["vegan", "spicy"]

    def test_keeps_duplicates_in_order(self):
        assert parse_token_list("spicy, vegan,spicy") == ["spicy", "vegan", "spicy"]

    def test_blank_text(self):
        assert parse_token_list("") == []
        assert parse_token_list(" , ,") == []


class TestMenuCatalogAdmin:
    """Admin mutations"""

    def test_add_item_appends_with_new_id(self, admin_gate, catalog):
        before = len(catalog)
        draft = _draft()

        item = catalog.add_item(draft)

        assert len(catalog) == before + 1
        assert catalog.items[-1] == item
        stored = catalog.get(item.id)
        assert stored == MenuItem.from_draft(item.id, draft)
        assert stored.price == Decimal("15.50")
        assert isinstance(stored.price, Decimal)

    def test_added_ids_are_unique_even_on_same_tick(self, admin_gate, catalog):
        first = catalog.add_item(_draft(name="One"))
        second = catalog.add_item(_draft(name="Two"))

        assert first.id != second.id
        ids = [item.id for item in catalog.items]
        assert len(ids) == len(set(ids))

    def test_add_rejects_negative_price(self, admin_gate, catalog):
        before = catalog.items

        with pytest.raises(ValidationError):
            catalog.add_item(_draft(price=Decimal("-1")))

        assert catalog.items == before

    @pytest.mark.parametrize("price", [Decimal("NaN"), Decimal("Infinity"), float("inf"), float("nan"), Decimal("-0.01")])
    def test_add_rejects_non_finite_or_negative_price(self, admin_gate, catalog, price):
        before = catalog.items

        with pytest.raises(ValidationError) as excinfo:
            catalog.add_item(_draft(price=price))

        assert excinfo.value.details == {"field": "price"}
        assert catalog.items == before

    @pytest.mark.parametrize("price", [Decimal("NaN"), Decimal("-Infinity"), float("nan"), -3])
    def test_update_rejects_non_finite_or_negative_price(self, admin_gate, catalog, price):
        before = catalog.items
        item = catalog.get("2")

        with pytest.raises(ValidationError):
            catalog.update_item(replace(item, price=price))

        assert catalog.items == before
        assert catalog.get("2").price == Decimal("9.99")

    def test_float_price_is_stored_as_cents(self, admin_gate, catalog):
        item = catalog.add_item(_draft(price=12.5))

        assert item.price == Decimal("12.50")

    def test_update_replaces_whole_item(self, admin_gate, catalog):
        original = catalog.get("2")
        updated = MenuItem(
            id="2",
            name="Chicken Caesar",
            category="Salads",
            price=Decimal("13.49"),
            description="Caesar with grilled chicken",
        )

        result = catalog.update_item(updated)

        assert result == updated
        assert catalog.get("2").tags == ()
        assert catalog.get("2") != original
        assert [item.id for item in catalog.items] == ["1", "2", "3", "4", "5"]

    def test_update_unknown_id(self, admin_gate, catalog):
        before = catalog.items
        ghost = MenuItem(id="missing", name="Ghost", category="None", price=Decimal("1"), description="")

        with pytest.raises(NotFound):
            catalog.update_item(ghost)

        assert catalog.items == before

    def test_remove_item(self, admin_gate, catalog):
        catalog.remove_item("3")

        assert catalog.get("3") is None
        assert [item.id for item in catalog.items] == ["1", "2", "4", "5"]

    def test_remove_absent_id_is_noop(self, admin_gate, catalog):
        before = catalog.items

        catalog.remove_item("does-not-exist")

        assert catalog.items == before


class TestStoredItemsAreReadOnly:
    """Items handed out by the catalog cannot change it behind its back"""

    def test_tags_from_a_list_are_stored_as_tuple(self, admin_gate, catalog):
        item = catalog.add_item(_draft(tags=["a"]))

        with pytest.raises(AttributeError):
            item.tags.append("injected")
        assert catalog.get(item.id).tags == ("a",)

    def test_update_copies_lists(self, admin_gate, catalog):
        tags = ["light"]
        item = replace(catalog.get("2"), tags=tags)

        catalog.update_item(item)
        tags.append("injected")

        assert catalog.get("2").tags == ("light",)

    def test_items_are_frozen(self, catalog):
        with pytest.raises(FrozenInstanceError):
            catalog.get("1").price = Decimal("0")


class TestMenuCatalogForbidden:
    """Non-admin roles cannot change the catalog"""

    @pytest.fixture(params=["staff", "signed_out"])
    def non_admin_catalog(self, request, gate, catalog):
        if request.param == "staff":
            gate.authenticate("staff@restaurant.com", "staff123")
        return catalog

    def test_add(self, non_admin_catalog):
        before = non_admin_catalog.items
        with pytest.raises(Forbidden):
            non_admin_catalog.add_item(_draft())
        assert non_admin_catalog.items == before

    def test_update(self, non_admin_catalog):
        before = non_admin_catalog.items
        item = non_admin_catalog.get("1")
        with pytest.raises(Forbidden):
            non_admin_catalog.update_item(MenuItem(**{**item.__dict__, "name": "Changed"}))
        assert non_admin_catalog.items == before

    def test_remove(self, non_admin_catalog):
        before = non_admin_catalog.items
        with pytest.raises(Forbidden):
            non_admin_catalog.remove_item("1")
        assert non_admin_catalog.items == before


class TestCatalogProjections:
    def test_categories_keep_first_seen_order(self, catalog):
        assert catalog.list_categories() == ["all", "Pizza", "Salads", "Bowls", "Sides", "Appetizers"]

    def test_available_items_skip_unavailable(self, catalog):
        assert "5" not in [item.id for item in catalog.available_items()]

    def test_duplicate_seed_ids_rejected(self, gate):
        item = MenuItem(id="1", name="A", category="X", price=Decimal("1"), description="")
        with pytest.raises(ValueError):
            MenuCatalog(gate, [item, item])


class TestMenuItemForm:
    """Editor text to draft conversion"""

    def test_round_trip_from_item(self, catalog):
        item = catalog.get("1")

        draft = draft_from_form(form_from_item(item))

        assert MenuItem.from_draft(item.id, draft) == item

    def test_blank_form_for_new_item(self):
        assert form_from_item(None) == MenuItemForm()

    def test_normalizes_fields(self):
        form = MenuItemForm(
            name="  Tiramisu ",
            category="Desserts",
            price="$6.5",
            description="Coffee soaked ladyfingers",
            tags=" sweet,, popular ",
            ingredients="mascarpone, espresso",
            available=False,
        )

        draft = draft_from_form(form)

        assert draft.name == "Tiramisu"
        assert draft.price == Decimal("6.50")
        assert draft.tags == ("sweet", "popular")
        assert draft.ingredients == ("mascarpone", "espresso")
        assert draft.available is False

    @pytest.mark.parametrize("field", ["name", "category", "description"])
    def test_required_fields(self, field):
        form = MenuItemForm(name="Soup", category="Starters", price="4", description="Hot")
        setattr(form, field, "   ")

        with pytest.raises(ValidationError) as excinfo:
            draft_from_form(form)

        assert excinfo.value.details == {"field": field}

    @pytest.mark.parametrize("text", ["abc", "", "-2", "NaN", "inf"])
    def test_bad_prices(self, text):
        with pytest.raises(ValidationError):
            parse_price(text)
