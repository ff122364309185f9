"""Application load balancer listener rules."""

from typing import Any, Dict, List, Optional, Set

from botocore.exceptions import ClientError

from ..core.fields import attr
from ..core.registry import register
from ..utils.errors import is_not_found
from .actions import ActionResource
from .base import RULE_NOT_FOUND, ElbResource
from .condition import ConditionResource
from .listener import ApplicationLoadBalancerListenerResource

DEFAULT_PRIORITY = -1


@register('application-load-balancer-listener-rule')
class ApplicationLoadBalancerListenerRuleResource(ElbResource):
    """A prioritized rule routing matching requests to its actions.

    The listener's default rule has the priority ``default``, which is
    stored as -1.

    Example:
        aws::application-load-balancer-listener-rule example-rule:
          alb-listener: $(aws::application-load-balancer-listener example-listener)
          priority: 10
          actions:
            - type: forward
              target-group: $(aws::load-balancer-target-group example-tg)
          conditions:
            - field: path-pattern
              values: ['/api/*']
    """

    actions: List[ActionResource] = attr(default_factory=list, required=True, updatable=True)
    conditions: List[ConditionResource] = attr(default_factory=list, required=True, updatable=True)
    alb_listener: Optional[ApplicationLoadBalancerListenerResource] = attr(required=True)
    priority: Optional[int] = attr(required=True, updatable=True, range=(1, 50000))

    # Outputs
    arn: Optional[str] = attr(output=True, id=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        actions = []
        for item in model.get('Actions') or []:
            action = self.new_subresource(ActionResource)
            action.copy_from(item)
            actions.append(action)
        self.actions = actions

        conditions = []
        for item in model.get('Conditions') or []:
            condition = self.new_subresource(ConditionResource)
            condition.copy_from(item)
            conditions.append(condition)
        self.conditions = conditions

        self.arn = model.get('RuleArn')

        priority = model.get('Priority')
        if priority is None:
            self.priority = None
        elif str(priority).lower() == 'default':
            self.priority = DEFAULT_PRIORITY
        else:
            self.priority = int(priority)

    def refresh(self) -> bool:
        try:
            response = self.client().describe_rules(RuleArns=[self.arn])
        except ClientError as e:
            if is_not_found(e, RULE_NOT_FOUND):
                return False
            raise

        rules = response.get('Rules') or []
        if not rules:
            return False

        legacy_fields = {condition.field for condition in self.conditions if condition.values}
        self.copy_from(rules[0])

        # Keep each condition in the form it was written in
        for condition in self.conditions:
            if condition.field in legacy_fields:
                condition.reset_configs()
            else:
                condition.reset_legacy()

        return True

    def create(self, ui, state) -> None:
        response = self.client().create_rule(
            Actions=self._actions_request(),
            Conditions=self._conditions_request(),
            ListenerArn=self.alb_listener.arn,
            Priority=self.priority,
        )
        self.arn = response['Rules'][0]['RuleArn']

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        client = self.client()

        if changed_fields & {'actions', 'conditions'}:
            client.modify_rule(
                RuleArn=self.arn,
                Actions=self._actions_request(),
                Conditions=self._conditions_request(),
            )

        if 'priority' in changed_fields:
            client.set_rule_priorities(RulePriorities=[{'RuleArn': self.arn, 'Priority': self.priority}])

    def delete(self, ui, state) -> None:
        self.client().delete_rule(RuleArn=self.arn)

    def _actions_request(self) -> List[Dict[str, Any]]:
        return [action.to_action() for action in self.actions]

    def _conditions_request(self) -> List[Dict[str, Any]]:
        return [condition.to_condition() for condition in self.conditions]
