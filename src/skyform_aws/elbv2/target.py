"""Targets registered with a target group."""

from typing import Any, Dict, Optional, Set

from botocore.exceptions import ClientError

from ..core.diffable import compact
from ..core.fields import attr
from ..core.registry import register
from ..utils.errors import is_not_found
from .base import INVALID_TARGET, ElbResource
from .target_group import TargetGroupResource

DRAINING = 'draining'


@register('load-balancer-target')
class TargetResource(ElbResource):
    """An instance, IP address or Lambda function registered with a target group.

    Example:
        aws::load-balancer-target example-target:
          id: i-0123456789abcdef0
          port: 80
          target-group: $(aws::load-balancer-target-group example-tg)
    """

    availability_zone: Optional[str] = attr()
    id: Optional[str] = attr(required=True, id=True)
    port: Optional[int] = attr()
    target_group: Optional[TargetGroupResource] = attr(required=True)

    def copy_from(self, model: Dict[str, Any]) -> None:
        self.availability_zone = model.get('AvailabilityZone')
        self.port = model.get('Port')
        self.id = model.get('Id')

    def refresh(self) -> bool:
        try:
            response = self.client().describe_target_health(
                TargetGroupArn=self.target_group.arn, Targets=[self.to_target()]
            )
        except ClientError as e:
            if is_not_found(e, INVALID_TARGET):
                return False
            raise

        for description in response.get('TargetHealthDescriptions') or []:
            if (description.get('TargetHealth') or {}).get('State') != DRAINING:
                self.copy_from(description['Target'])
                return True

        return False

    def create(self, ui, state) -> None:
        self.client().register_targets(TargetGroupArn=self.target_group.arn, Targets=[self.to_target()])

    def update(self, ui, state, current, changed_fields: Set[str]) -> None:
        pass

    def delete(self, ui, state) -> None:
        self.client().deregister_targets(TargetGroupArn=self.target_group.arn, Targets=[self.to_target()])

    def to_target(self) -> Dict[str, Any]:
        return compact(AvailabilityZone=self.availability_zone, Id=self.id, Port=self.port)
