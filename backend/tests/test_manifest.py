"""Tests for manifest decoding."""

import pytest

from sunspear.core.compose.manifest import parse_manifest, ManifestSpec, ServiceSpec
from sunspear.core.compose.translators import parse_command, parse_environment, parse_ports
from sunspear.utils.exceptions import ManifestParseError


class TestParseManifest:
    """Tests for parse_manifest."""

    def test_parse_minimal(self):
        """A single service with only an image."""
        spec = parse_manifest("services:\n  web:\n    image: nginx\n")

        assert isinstance(spec, ManifestSpec)
        assert spec.version == ""
        assert spec.service_names == ["web"]
        assert spec.services["web"] == ServiceSpec(image="nginx")

    def test_parse_full_service(self, two_tier_manifest):
        """All service fields are decoded, in document order."""
        spec = parse_manifest(two_tier_manifest)

        assert spec.version == "3.8"
        assert spec.service_names == ["web", "db"]

        web = spec.services["web"]
        assert web.image == "nginx:alpine"
        assert web.ports == ["8080:80"]
        assert web.volumes == ["static:/usr/share/nginx/html", "./conf:/etc/nginx/conf.d"]
        assert web.depends_on == ["db"]

        db = spec.services["db"]
        assert db.environment == {"POSTGRES_PASSWORD": "secret"}
        assert db.restart == "unless-stopped"

    def test_scalar_list_entries_become_strings(self):
        """Unquoted port numbers decode to strings."""
        spec = parse_manifest("services:\n  app:\n    image: x\n    ports:\n      - 8080\n")

        assert spec.services["app"].ports == ["8080"]

    def test_short_port_mapping_keeps_source_text(self):
        """``2222:22`` is a port mapping, not a base-60 integer."""
        spec = parse_manifest("services:\n  git:\n    image: gitea\n    ports:\n      - 2222:22\n      - 1:30\n")

        assert spec.services["git"].ports == ["2222:22", "1:30"]

        exposed, bindings = parse_ports(spec.services["git"].ports)
        assert exposed == ["22/tcp", "30/tcp"]
        assert bindings["22/tcp"] == ("0.0.0.0", "2222")

    @pytest.mark.parametrize("literal", ["3.10", "3.0", "2"])
    def test_version_keeps_source_text(self, literal):
        spec = parse_manifest(f"version: {literal}\nservices:\n  app:\n    image: x\n")

        assert spec.version == literal

    def test_numeric_command_and_env_keep_source_text(self):
        spec = parse_manifest(
            "services:\n  app:\n    image: x\n    command: [sleep, 0x10]\n"
            "    environment:\n      RATIO: 1e3\n      DEBUG: true\n"
        )
        app = spec.services["app"]

        assert parse_command(app.command) == ["sleep", "0x10"]
        assert parse_environment(app.environment) == ["RATIO=1e3", "DEBUG=true"]

    def test_unknown_keys_are_ignored(self):
        """Unknown top-level and service keys do not fail parsing."""
        spec = parse_manifest(
            "x-common: {a: 1}\nservices:\n  app:\n    image: x\n    healthcheck: {test: true}\n"
        )

        assert spec.service_names == ["app"]

    def test_declarations_are_kept(self):
        """Top-level network and volume declarations are recorded."""
        spec = parse_manifest(
            "services:\n  app:\n    image: x\nvolumes:\n  data:\nnetworks:\n  front: {}\n"
        )

        assert spec.volumes == {"data": None}
        assert spec.networks == {"front": {}}

    def test_invalid_yaml(self):
        """Syntax errors are wrapped."""
        with pytest.raises(ManifestParseError) as exc_info:
            parse_manifest("services:\n  web: [unclosed\n")

        assert "failed to parse YAML" in exc_info.value.message
        assert exc_info.value.__cause__ is not None

    @pytest.mark.parametrize("text", [
        "",
        "version: '3'\n",
        "services: {}\n",
        "services:\n",
    ])
    def test_no_services(self, text):
        """An empty service mapping is rejected."""
        with pytest.raises(ManifestParseError) as exc_info:
            parse_manifest(text)

        assert exc_info.value.message == "no services defined in compose file"

    @pytest.mark.parametrize("text", [
        "- a\n- b\n",
        "services:\n  - web\n",
        "services:\n  web: nginx\n",
        "services:\n  web:\n    image: x\n    ports: '80:80'\n",
        "services:\n  web:\n    image: x\n    volumes:\n      - {type: bind}\n",
    ])
    def test_wrong_shape(self, text):
        """Wrong document shapes are parse errors."""
        with pytest.raises(ManifestParseError):
            parse_manifest(text)

    def test_parse_error_is_client_error(self):
        """Parse errors map to HTTP 400."""
        with pytest.raises(ManifestParseError) as exc_info:
            parse_manifest("services: {}")

        assert exc_info.value.code == 400
