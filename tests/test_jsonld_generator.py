"""Tests for the JSON-LD generator entry points."""

import pytest

from app.errors import MalformedInputError
from app.generators.jsonld_generator import JsonLdGenerator, coerce_model
from app.layers.hooks import DocumentHooks
from app.layers.url_resolver import StaticSecurityProbe
from app.models.catalog import CategorySimpleModel


def product_payload(**overrides):
    payload = {
        "id": 1,
        "name": "Apple iCam",
        "se_name": "apple-icam",
        "sku": "APPLE_CAM",
        "short_description": "Photograph with style",
        "default_picture_model": {"image_url": "https://shop.example.com/images/icam.jpeg"},
        "product_manufacturers": [{"name": "Apple"}],
        "product_review_overview": {"rating_sum": 40, "total_reviews": 10},
        "product_price": {"price_value": "1300.00", "call_for_price": False, "currency_code": "USD"},
        "in_stock": True,
    }
    payload.update(overrides)
    return payload


class TestCoerceModel:
    def test_passes_instances_through(self):
        category = CategorySimpleModel(name="Books", se_name="books")
        assert coerce_model(CategorySimpleModel, category) is category

    def test_validates_dicts(self):
        category = coerce_model(CategorySimpleModel, {"name": "Books", "se_name": "books"})
        assert category.se_name == "books"

    def test_invalid_dict_is_malformed(self):
        with pytest.raises(MalformedInputError) as exc:
            coerce_model(CategorySimpleModel, {"name": "Books"})
        assert exc.value.details["errors"][0]["loc"] == ("se_name",)


class TestJsonLdGenerator:
    @pytest.mark.asyncio
    async def test_category_breadcrumb_from_dicts(self, resolver, hooks):
        generator = JsonLdGenerator(resolver, hooks, max_depth=5, concurrent=False)
        breadcrumb = await generator.prepare_category_breadcrumb(
            [{"name": "Books", "se_name": "books"}, {"name": "Fiction", "se_name": "fiction"}],
            StaticSecurityProbe(secured=False),
        )
        assert [item.item.id for item in breadcrumb.itemListElement] == [
            "http://shop.example.com/books",
            "http://shop.example.com/fiction",
        ]

    @pytest.mark.asyncio
    async def test_product_breadcrumb(self, resolver, hooks, product_breadcrumb):
        generator = JsonLdGenerator(resolver, hooks, max_depth=5, concurrent=False)
        breadcrumb = await generator.prepare_product_breadcrumb(product_breadcrumb, StaticSecurityProbe(True))
        assert breadcrumb.itemListElement[-1].position == 4
        assert breadcrumb.itemListElement[-1].item.id.startswith("https://")

    @pytest.mark.asyncio
    async def test_disabled_product_breadcrumb_is_skipped(self, resolver, hooks, product_breadcrumb):
        product_breadcrumb.enabled = False
        generator = JsonLdGenerator(resolver, hooks, max_depth=5, concurrent=False)
        assert await generator.prepare_product_breadcrumb(product_breadcrumb, StaticSecurityProbe(True)) is None
        assert resolver.calls == []

    @pytest.mark.asyncio
    async def test_product_from_dict(self, resolver, hooks):
        generator = JsonLdGenerator(resolver, hooks, max_depth=5, concurrent=False)
        product = await generator.prepare_product(product_payload(), StaticSecurityProbe(True))
        data = product.to_jsonld()

        assert data["@context"] == "https://schema.org"
        assert data["@type"] == "Product"
        assert data["brand"] == [{"@type": "Brand", "name": "Apple"}]
        assert data["aggregateRating"] == {"@type": "AggregateRating", "ratingValue": "4.0", "reviewCount": 10}
        assert data["offers"] == {
            "@type": "Offer",
            "url": "https://shop.example.com/apple-icam",
            "price": "1300.00",
            "priceCurrency": "USD",
            "availability": "https://schema.org/InStock",
        }
        assert data["isSimilarTo"] == []
        assert "gtin" not in data

    @pytest.mark.asyncio
    async def test_negative_review_count_is_malformed(self, resolver, hooks):
        generator = JsonLdGenerator(resolver, hooks, max_depth=5, concurrent=False)
        payload = product_payload(product_review_overview={"rating_sum": 0, "total_reviews": -1})
        with pytest.raises(MalformedInputError):
            await generator.prepare_product(payload, StaticSecurityProbe(True))

    @pytest.mark.asyncio
    async def test_missing_name_is_malformed(self, resolver, hooks):
        generator = JsonLdGenerator(resolver, hooks, max_depth=5, concurrent=False)
        payload = product_payload()
        del payload["name"]
        with pytest.raises(MalformedInputError):
            await generator.prepare_product(payload, StaticSecurityProbe(True))

    @pytest.mark.asyncio
    async def test_max_depth_applies(self, resolver, hooks):
        generator = JsonLdGenerator(resolver, hooks, max_depth=1, concurrent=False)
        grandchild = product_payload(id=3, se_name="grandchild")
        child = product_payload(id=2, se_name="child", associated_products=[grandchild])
        product = await generator.prepare_product(
            product_payload(associated_products=[child]), StaticSecurityProbe(True)
        )
        assert len(product.isSimilarTo) == 1
        assert product.isSimilarTo[0].isSimilarTo == []

    @pytest.mark.asyncio
    async def test_script_tag(self, resolver, hooks):
        generator = JsonLdGenerator(resolver, hooks, max_depth=5, concurrent=False)
        product = await generator.prepare_product(product_payload(), StaticSecurityProbe(True))
        tag = product.to_script_tag()
        assert tag.startswith('<script type="application/ld+json">')
        assert '"name": "Apple iCam"' in tag

    @pytest.mark.asyncio
    async def test_shares_hook_registry_with_assemblers(self, resolver, category_chain):
        hooks = DocumentHooks(isolate_failures=False)
        generator = JsonLdGenerator(resolver, hooks, max_depth=5, concurrent=False)
        assert generator.breadcrumbs.hooks is hooks
        assert generator.products.hooks is hooks

        seen = []
        hooks.register(lambda doc: seen.append(doc.type))
        await generator.prepare_category_breadcrumb(category_chain, StaticSecurityProbe(True))
        await generator.prepare_product(product_payload(), StaticSecurityProbe(True))
        assert seen == ["BreadcrumbList", "Product"]
