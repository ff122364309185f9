"""Loading provider settings and resources from YAML."""

from unittest.mock import patch

import pytest

from skyform_aws.apigatewayv2 import ApiResource, StageResource
from skyform_aws.config import Config, ConfigValidationError
from skyform_aws.core import resource_class, resource_types
from skyform_aws.elbv2 import ApplicationLoadBalancerListenerResource, TargetGroupResource

PROVIDER = """
provider:
  region: us-east-1
"""


def write(tmp_path, text):
    path = tmp_path / "skyform.yml"
    path.write_text(text)
    return path


def load_errors(path):
    with pytest.raises(ConfigValidationError) as excinfo:
        Config(str(path)).load()
    return excinfo.value.errors


def test_every_family_is_registered():
    types = resource_types()
    assert "aws::api-gateway" in types
    assert "aws::application-load-balancer" in types
    assert "aws::cognito-user-pool" in types
    assert "aws::kendra-data-source" in types
    assert resource_class("kendra-index").type_name == "aws::kendra-index"


def test_resolves_references(tmp_path):
    path = write(tmp_path, PROVIDER + """
resources:
  aws::api-gateway-stage prod:
    name: prod
    api: $(aws::api-gateway example)
    stage-variables:
      stage: prod

  aws::api-gateway example:
    name: example-api
    protocol-type: HTTP
""")

    config = Config(str(path)).load()

    api = config.resource("aws::api-gateway", "example")
    stage = config.resource("aws::api-gateway-stage", "prod")
    assert isinstance(api, ApiResource)
    assert isinstance(stage, StageResource)
    assert stage.api is api
    assert stage.stage_variables == {"stage": "prod"}
    assert stage.state() is config.state
    assert stage.credentials().region == "us-east-1"


def test_loaded_resources_are_tracked_by_the_state(tmp_path):
    path = write(tmp_path, PROVIDER + """
resources:
  aws::api-gateway example:
    id: abc123
    name: example-api
    protocol-type: HTTP
""")

    config = Config(str(path)).load()

    api = config.resource("aws::api-gateway", "example")
    assert config.state.resources() == [api]
    assert config.state.find(ApiResource, "abc123") is api


def test_resolves_references_inside_lists(tmp_path):
    path = write(tmp_path, PROVIDER + """
resources:
  aws::load-balancer-target-group web:
    name: web
    port: 80
    protocol: HTTP
    vpc-id: vpc-0123456789abcdef0
    health-check:
      path: /health

  aws::application-load-balancer web:
    name: web
    subnet-ids: [subnet-1, subnet-2]

  aws::application-load-balancer-listener web:
    alb: $(aws::application-load-balancer web)
    port: 80
    protocol: HTTP
    default-actions:
      - type: forward
        target-group: $(aws::load-balancer-target-group web)
""")

    config = Config(str(path)).load()

    listener = config.resource("aws::application-load-balancer-listener", "web")
    target_group = config.resource("aws::load-balancer-target-group", "web")
    assert isinstance(listener, ApplicationLoadBalancerListenerResource)
    assert isinstance(target_group, TargetGroupResource)
    assert listener.default_actions[0].target_group is target_group
    assert listener.default_actions[0].parent_resource() is listener


def test_unknown_type(tmp_path):
    path = write(tmp_path, PROVIDER + """
resources:
  aws::does-not-exist example:
    name: example
""")

    errors = load_errors(path)
    assert errors == [{
        "loc": ["resources", "aws::does-not-exist example"],
        "msg": "Unknown resource type 'aws::does-not-exist'",
    }]


def test_dangling_reference(tmp_path):
    path = write(tmp_path, PROVIDER + """
resources:
  aws::api-gateway-stage prod:
    name: prod
    api: $(aws::api-gateway missing)
""")

    errors = load_errors(path)
    assert {"loc": ["resources", "aws::api-gateway-stage prod"],
            "msg": "Unknown reference '$(aws::api-gateway missing)'"} in errors
    assert {"loc": ["resources", "aws::api-gateway-stage prod", "api"], "msg": "'api' is required."} in errors


def test_field_validation_errors_are_collected(tmp_path):
    path = write(tmp_path, PROVIDER + """
resources:
  aws::api-gateway first:
    protocol-type: REST

  aws::kendra-index second:
    name: example
    role-arn: arn:aws:iam::123456789012:role/kendra
""")

    errors = load_errors(path)
    assert {"loc": ["resources", "aws::api-gateway first", "name"], "msg": "'name' is required."} in errors
    assert {"loc": ["resources", "aws::api-gateway first", "protocol-type"],
            "msg": "'protocol-type' must be one of HTTP, WEBSOCKET, not 'REST'."} in errors
    assert {"loc": ["resources", "aws::kendra-index second", "edition"], "msg": "'edition' is required."} in errors
    assert len(errors) == 3


def test_unknown_field(tmp_path):
    path = write(tmp_path, PROVIDER + """
resources:
  aws::api-gateway example:
    name: example
    protocol-type: HTTP
    colour: blue
""")

    errors = load_errors(path)
    assert errors[0]["loc"] == ["resources", "aws::api-gateway example", "colour"]


def test_bad_resource_key(tmp_path):
    path = write(tmp_path, PROVIDER + """
resources:
  example:
    name: example
""")

    errors = load_errors(path)
    assert errors == [{"loc": ["resources", "example"], "msg": "Resource keys must be written as '<type> <name>'"}]


def test_provider_is_required(tmp_path):
    path = write(tmp_path, "resources: {}\n")
    assert load_errors(path) == [{"loc": ["provider"], "msg": "Required field 'provider' is missing"}]


def test_invalid_region(tmp_path):
    path = write(tmp_path, "provider:\n  region: moon-1\n")
    errors = load_errors(path)
    assert errors[0]["loc"] == ["provider", "region"]
    assert "Invalid AWS region: moon-1" in errors[0]["msg"]


def test_wait_overrides_reach_the_state(tmp_path):
    path = write(tmp_path, """
provider:
  region: eu-west-1
  state-path: {state}
  wait:
    kendra-index:
      create:
        at-most: 60
        check-every: 30
""".format(state=tmp_path / "state.json"))

    config = Config(str(path)).load()

    assert config.state.wait_settings.for_action("aws::kendra-index", "create", 1800, 300) == (60, 30)
    assert config.state.wait_settings.for_action("aws::kendra-index", "delete", 1800, 300) == (1800, 300)
    assert config.credentials.region == "eu-west-1"


def test_invalid_wait_action(tmp_path):
    path = write(tmp_path, """
provider:
  region: us-east-1
  wait:
    kendra-index:
      restart:
        at-most: 60
""")

    errors = load_errors(path)
    assert "Invalid wait action 'restart'" in errors[0]["msg"]


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config(str(tmp_path / "missing.yml")).load()


def test_invalid_yaml(tmp_path):
    path = write(tmp_path, "provider: [unclosed\n")
    with pytest.raises(ConfigValidationError, match="Failed to parse YAML"):
        Config(str(path)).load()


def test_configure_logging(tmp_path):
    path = write(tmp_path, "provider:\n  region: us-east-1\n  log-level: DEBUG\n")

    with patch("skyform_aws.config.parser.setup_logging") as setup_logging:
        Config(str(path)).load(configure_logging=True)

    setup_logging.assert_called_once_with("debug", log_dir=None)


def test_error_message_lists_every_problem(tmp_path):
    path = write(tmp_path, PROVIDER + """
resources:
  aws::api-gateway example:
    protocol-type: HTTP
""")

    with pytest.raises(ConfigValidationError) as excinfo:
        Config(str(path)).load()

    assert str(excinfo.value).splitlines() == [
        "Configuration validation failed with 1 error(s)",
        "",
        "  - resources -> aws::api-gateway example -> name: 'name' is required.",
    ]
