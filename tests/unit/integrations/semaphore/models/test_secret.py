"""Unit tests for Secret models."""

from __future__ import annotations

import json

import pytest
import yaml

from semaphore_client.integrations.semaphore.exceptions import (
    SemaphoreSerializationError,
    SemaphoreValidationError,
)
from semaphore_client.integrations.semaphore.models import (
    EnvVar,
    File,
    ResourceListBase,
    Secret,
    SecretList,
)


@pytest.fixture
def full_secret() -> Secret:
    """A secret with every field populated."""
    secret = Secret.from_name("aws-creds")
    secret.metadata.id = "b5c4d3e2"
    secret.metadata.create_time = 1540000000
    secret.metadata.update_time = 1540000100
    secret.data.env_vars = [
        EnvVar(name="AWS_ACCESS_KEY_ID", value="AKIA"),
        EnvVar(name="AWS_SECRET_ACCESS_KEY", value="s3cr3t"),
    ]
    secret.data.files = [File(path="/home/semaphore/.aws/config", content="W2RlZmF1bHRd")]
    return secret


class TestSecretConstruction:
    """Tests for building secrets."""

    @pytest.mark.unit
    def test_from_name_defaults(self) -> None:
        """from_name should default version and kind and leave data empty."""
        secret = Secret.from_name("db-password")

        assert secret.api_version == "v1beta"
        assert secret.kind == "Secret"
        assert secret.metadata.name == "db-password"
        assert secret.metadata.id is None
        assert secret.data.env_vars == []
        assert secret.data.files == []

    @pytest.mark.unit
    def test_from_name_round_trip(self) -> None:
        """Serializing then parsing should yield the same entity."""
        secret = Secret.from_name("db-password")

        assert Secret.from_json(secret.to_json()) == secret
        assert Secret.from_yaml(secret.to_yaml()) == secret

    @pytest.mark.unit
    def test_object_name(self) -> None:
        """object_name should prefix the pluralized kind."""
        assert Secret.from_name("db-password").object_name == "Secrets/db-password"

    @pytest.mark.unit
    def test_identifier_prefers_id(self, full_secret: Secret) -> None:
        """identifier should be the id once assigned."""
        assert full_secret.identifier == "b5c4d3e2"

    @pytest.mark.unit
    def test_identifier_falls_back_to_name(self) -> None:
        """identifier should be the name without an id."""
        assert Secret.from_name("db-password").identifier == "db-password"


class TestSecretValidation:
    """Tests for validate_resource."""

    @pytest.mark.unit
    def test_blank_name_fails(self) -> None:
        """A blank name should fail validation."""
        with pytest.raises(SemaphoreValidationError) as exc_info:
            Secret.from_name("").validate_resource()

        assert "Secret name can't be blank" in str(exc_info.value)

    @pytest.mark.unit
    def test_named_secret_passes(self, full_secret: Secret) -> None:
        """A named secret should pass even with empty data."""
        full_secret.validate_resource()
        Secret.from_name("x").validate_resource()


class TestSecretJson:
    """Tests for JSON (de)serialization."""

    @pytest.mark.unit
    def test_defaults_applied(self) -> None:
        """Missing apiVersion and kind should be back-filled."""
        secret = Secret.from_json(b'{"metadata":{"name":"x"}}')

        assert secret.api_version == "v1beta"
        assert secret.kind == "Secret"
        assert secret.metadata.name == "x"

    @pytest.mark.unit
    def test_empty_strings_backfilled(self) -> None:
        """Empty apiVersion and kind should be treated as absent."""
        secret = Secret.from_json('{"apiVersion": "", "kind": "", "metadata": {"name": "x"}}')

        assert secret.api_version == "v1beta"
        assert secret.kind == "Secret"

    @pytest.mark.unit
    def test_unknown_fields_ignored(self) -> None:
        """JSON parsing should be permissive."""
        secret = Secret.from_json(
            '{"metadata": {"name": "x", "owner": "me"}, "extra": true, '
            '"data": {"env_vars": [{"name": "A", "value": "1", "hidden": 1}]}}'
        )

        assert secret.data.env_vars == [EnvVar(name="A", value="1")]

    @pytest.mark.unit
    def test_timestamps_as_strings(self, full_secret: Secret) -> None:
        """Timestamps are written as strings and read from strings or ints."""
        payload = json.loads(full_secret.to_json())

        from_string = Secret.from_json(b'{"metadata": {"name": "x", "create_time": "5"}}')
        from_int = Secret.from_json(b'{"metadata": {"name": "x", "create_time": 7}}')

        assert payload["metadata"]["create_time"] == "1540000000"
        assert from_string.metadata.create_time == 5
        assert from_int.metadata.create_time == 7

    @pytest.mark.unit
    def test_wire_field_names(self, full_secret: Secret) -> None:
        """JSON should use apiVersion and snake_case payload names."""
        payload = json.loads(full_secret.to_json())

        assert set(payload) == {"apiVersion", "kind", "metadata", "data"}
        assert set(payload["data"]) == {"env_vars", "files"}
        assert payload["data"]["files"][0] == {
            "path": "/home/semaphore/.aws/config",
            "content": "W2RlZmF1bHRd",
        }

    @pytest.mark.unit
    def test_unset_id_omitted(self) -> None:
        """Optional metadata fields should be omitted when unset."""
        payload = json.loads(Secret.from_name("x").to_json())

        assert payload["metadata"] == {"name": "x"}

    @pytest.mark.unit
    def test_round_trip(self, full_secret: Secret) -> None:
        """JSON round trip should preserve every field and order."""
        assert Secret.from_json(full_secret.to_json()) == full_secret

    @pytest.mark.unit
    def test_malformed_json(self) -> None:
        """Malformed JSON should raise a serialization error."""
        with pytest.raises(SemaphoreSerializationError) as exc_info:
            Secret.from_json(b"{not json")

        assert "failed to deserialize secret object" in str(exc_info.value)

    @pytest.mark.unit
    def test_wrong_type(self) -> None:
        """Type mismatches should raise a serialization error."""
        with pytest.raises(SemaphoreSerializationError):
            Secret.from_json(b'{"data": {"env_vars": "nope"}}')

    @pytest.mark.unit
    def test_null_data_lists(self) -> None:
        """Null lists, as sent for a freshly built secret, should mean empty."""
        secret = Secret.from_json(
            b'{"apiVersion": null, "kind": null, "metadata": {"name": "x"}, '
            b'"data": {"env_vars": null, "files": null}}'
        )

        assert secret.api_version == "v1beta"
        assert secret.kind == "Secret"
        assert secret.data.env_vars == []
        assert secret.data.files == []

    @pytest.mark.unit
    def test_null_strings_and_objects(self) -> None:
        """Null strings and nested objects should fall back to defaults."""
        secret = Secret.from_json(
            b'{"metadata": {"name": null, "id": null, "create_time": null}, '
            b'"data": {"env_vars": [{"name": "A", "value": null}]}}'
        )
        no_data = Secret.from_json(b'{"metadata": {"name": "x"}, "data": null}')

        assert secret.metadata.name == ""
        assert secret.metadata.id is None
        assert secret.metadata.create_time is None
        assert secret.data.env_vars == [EnvVar(name="A", value="")]
        assert no_data.data.env_vars == []

    @pytest.mark.unit
    def test_numbers_not_coerced(self) -> None:
        """JSON numbers are not text; only YAML plain scalars are read as text."""
        with pytest.raises(SemaphoreSerializationError):
            Secret.from_json(b'{"data": {"env_vars": [{"name": "A", "value": 5432}]}}')


class TestSecretYaml:
    """Tests for YAML (de)serialization."""

    @pytest.mark.unit
    def test_parse(self) -> None:
        """YAML documents should parse with defaults applied."""
        secret = Secret.from_yaml(
            """
metadata:
  name: aws-creds
data:
  env_vars:
    - name: AWS_ACCESS_KEY_ID
      value: AKIA
  files:
    - path: /tmp/a
      content: Zm9v
"""
        )

        assert secret.api_version == "v1beta"
        assert secret.kind == "Secret"
        assert secret.data.env_vars[0].name == "AWS_ACCESS_KEY_ID"
        assert secret.data.files[0].path == "/tmp/a"

    @pytest.mark.unit
    def test_unknown_top_level_field_rejected(self) -> None:
        """Strict YAML should reject unknown top-level fields."""
        with pytest.raises(SemaphoreSerializationError) as exc_info:
            Secret.from_yaml("metadata:\n  name: x\nspec: {}\n")

        assert "spec" in str(exc_info.value)

    @pytest.mark.unit
    def test_unknown_nested_field_rejected(self) -> None:
        """Strict YAML should reject unknown fields at any depth."""
        with pytest.raises(SemaphoreSerializationError):
            Secret.from_yaml(
                "metadata:\n  name: x\ndata:\n  env_vars:\n    - name: A\n      val: 1\n"
            )

    @pytest.mark.unit
    def test_python_names_rejected(self) -> None:
        """Only wire names are valid in YAML."""
        with pytest.raises(SemaphoreSerializationError):
            Secret.from_yaml("api_version: v1beta\nmetadata:\n  name: x\n")

    @pytest.mark.unit
    def test_non_mapping_rejected(self) -> None:
        """A YAML list is not a secret."""
        with pytest.raises(SemaphoreSerializationError):
            Secret.from_yaml("- a\n- b\n")

    @pytest.mark.unit
    def test_syntax_error(self) -> None:
        """YAML syntax errors should raise a serialization error."""
        with pytest.raises(SemaphoreSerializationError):
            Secret.from_yaml("metadata: [unclosed\n")

    @pytest.mark.unit
    def test_plain_scalars_read_as_text(self) -> None:
        """Unquoted numbers, booleans and dates in text fields keep their text."""
        secret = Secret.from_yaml(
            """
metadata:
  name: db
data:
  env_vars:
    - name: DB_PORT
      value: 5432
    - name: DEBUG
      value: true
    - name: RATIO
      value: 0.5
    - name: SINCE
      value: 2024-01-31
  files:
    - path: /tmp/n
      content: 12
"""
        )

        assert [e.value for e in secret.data.env_vars] == ["5432", "true", "0.5", "2024-01-31"]
        assert secret.data.files[0].content == "12"

    @pytest.mark.unit
    def test_empty_scalar_is_default(self) -> None:
        """An empty YAML value should mean the default."""
        secret = Secret.from_yaml(
            "metadata:\n  name: x\ndata:\n  env_vars:\n    - name: A\n      value:\n"
        )

        assert secret.data.env_vars == [EnvVar(name="A", value="")]

    @pytest.mark.unit
    def test_null_unknown_field_rejected(self) -> None:
        """Unknown keys are rejected even when their value is empty."""
        with pytest.raises(SemaphoreSerializationError):
            Secret.from_yaml("metadata:\n  name: x\n  owner:\n")

    @pytest.mark.unit
    def test_timestamps_are_ints(self, full_secret: Secret) -> None:
        """YAML output keeps timestamps numeric."""
        document = yaml.safe_load(full_secret.to_yaml())

        assert document["metadata"]["create_time"] == 1540000000

    @pytest.mark.unit
    def test_round_trip(self, full_secret: Secret) -> None:
        """YAML round trip should preserve every field."""
        assert Secret.from_yaml(full_secret.to_yaml()) == full_secret

    @pytest.mark.unit
    def test_key_order(self, full_secret: Secret) -> None:
        """YAML output should list the envelope first."""
        assert full_secret.to_yaml().startswith("apiVersion: v1beta\nkind: Secret\n")


class TestSecretList:
    """Tests for SecretList."""

    @pytest.mark.unit
    def test_from_json(self) -> None:
        """List parsing should keep order and expose items."""
        secrets = SecretList.from_json(
            b'{"secrets": [{"metadata": {"name": "a"}}, {"metadata": {"name": "b"}}]}'
        )

        assert [s.metadata.name for s in secrets.items] == ["a", "b"]

    @pytest.mark.unit
    def test_defaults_propagate_to_entries(self) -> None:
        """Every entry should carry the back-filled version and kind."""
        secrets = SecretList.from_json(b'{"secrets": [{"metadata": {"name": "a"}}]}')

        assert secrets.items[0].api_version == "v1beta"
        assert secrets.items[0].kind == "Secret"

    @pytest.mark.unit
    def test_empty(self) -> None:
        """An empty document should yield no secrets."""
        assert SecretList.from_json(b"{}").items == []

    @pytest.mark.unit
    def test_null_secrets(self) -> None:
        """A null collection should parse as empty."""
        assert SecretList.from_json(b'{"secrets": null}').items == []

    @pytest.mark.unit
    def test_malformed(self) -> None:
        """Malformed list bodies should raise a serialization error."""
        with pytest.raises(SemaphoreSerializationError) as exc_info:
            SecretList.from_json(b'{"secrets": 3}')

        assert "secret list" in str(exc_info.value)


class TestResourceListBase:
    """Tests for the list wrapper contract."""

    @pytest.mark.unit
    def test_items_required(self) -> None:
        """A list model that does not expose items cannot be built."""

        class UntypedList(ResourceListBase):
            secrets: list[Secret] = []

        with pytest.raises(TypeError):
            UntypedList()
