"""Tests for the generator module."""

from typegen.config import Config
from typegen.generator import ENDPOINT_PREFIX, generate_types


class TestGenerateTypes:
    """Test the whole-document driver on the petstore document."""

    def test_schema_declarations(self, petstore):
        result = generate_types(petstore)
        pet = result.declarations["Pet"]
        assert pet.name == "Pet"
        assert pet.code.startswith("/**\n * A pet in the store\n */\nexport type Pet = {\n")
        assert "  id: number;" in pet.code
        assert "  category?: Category;" in pet.code
        assert "  tag?: string | null;" in pet.code
        assert pet.dependencies == {"Category"}

    def test_endpoint_keys_prefixed(self, petstore):
        result = generate_types(petstore, Config(path_prefix_skip=1))
        endpoint_keys = [k for k in result.declarations if k.startswith(ENDPOINT_PREFIX)]
        assert endpoint_keys == [
            "endpoint:pets_get",
            "endpoint:pets_post",
            "endpoint:pets_by_petid_get",
            "endpoint:pets_by_petid_delete",
            "endpoint:auth_login",
            "endpoint:health",
        ]

    def test_schema_and_endpoint_split(self, petstore):
        result = generate_types(petstore, Config(path_prefix_skip=1))
        assert list(result.schema_declarations()) == ["Category", "Pet", "NewPet", "Error"]
        assert "auth_login" in result.endpoint_declarations()

    def test_endpoint_dependencies(self, petstore):
        result = generate_types(petstore, Config(path_prefix_skip=1))
        assert result.declarations["endpoint:pets_by_petid_get"].dependencies == {"Pet", "Category", "Error"}
        assert result.declarations["endpoint:auth_login"].dependencies == frozenset()

    def test_url_tree_matches_declarations(self, petstore):
        """URL constant keys and declaration names come from the same names."""
        result = generate_types(petstore, Config(path_prefix_skip=1))
        assert result.url_tree["auth"] == {"auth_login": "/api/v1/auth/login"}
        assert result.url_tree["health"] == "/api/v1/health"
        assert result.url_tree["pets_by_petid_get"] == "/api/v1/pets/{petId}"
        for name in ("pets_get", "pets_post", "pets_by_petid_delete"):
            assert f"endpoint:{name}" in result.declarations
            assert name in result.url_tree

    def test_idempotent(self, petstore):
        config = Config(path_prefix_skip=1)
        first = generate_types(petstore, config)
        second = generate_types(petstore, config)
        assert first.declarations == second.declarations
        assert [d.code for d in first.declarations.values()] == [d.code for d in second.declarations.values()]
        assert first.url_tree == second.url_tree

    def test_bad_schema_does_not_abort_others(self, petstore):
        petstore["components"]["schemas"]["Broken"] = {"$ref": "#/components/schemas/Nope"}
        result = generate_types(petstore)
        assert "Broken" in result.errors
        assert "Broken" not in result.declarations
        assert "Pet" in result.declarations
        assert "endpoint:api_v1_health" in result.declarations

    def test_alias_schema(self, petstore):
        petstore["components"]["schemas"]["PetAlias"] = {"$ref": "#/components/schemas/Pet"}
        result = generate_types(petstore)
        alias = result.declarations["PetAlias"]
        assert alias.code.startswith("/**\n * A pet in the store\n */\nexport type PetAlias = {")
        assert alias.dependencies == {"Pet", "Category"}

    def test_empty_document(self):
        result = generate_types({"paths": {}, "components": {}})
        assert result.declarations == {}
        assert result.url_tree == {}
        assert result.errors == {}
