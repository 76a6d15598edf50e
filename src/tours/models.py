"""
Tour Data Model
===============

Step and Tour aggregate. A Tour owns an ordered list of Steps; list order
is display and playback order.

Usage:
    from src.tours.models import Tour, Step

    tour = Tour(title='Onboarding')
    step = tour.add_step(Step(text='Welcome!', image='https://...'))
    tour.update_step_text(step.id, 'Welcome aboard!')
    tour.remove_step(step.id)
"""

import copy
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from src.tours.errors import ValidationError


def new_id() -> str:
    """Generate a fresh identifier for a tour or step."""
    return uuid.uuid4().hex


def _parse_datetime(value) -> datetime:
    if value is None:
        return datetime.now()
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


@dataclass
class Step:
    """One annotated screenshot in a tour."""

    text: str = ''
    image: str = ''
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'text': self.text, 'image': self.image}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Step':
        if not isinstance(data, dict):
            raise ValidationError(f"Step must be a mapping, got {type(data).__name__}")
        step_id = data.get('id')
        return cls(
            text=str(data.get('text') or ''),
            image=str(data.get('image') or ''),
            # Legacy data used numeric step ids
            id=str(step_id) if step_id is not None else None,
        )


@dataclass
class Analytics:
    """View and share counters. Not touched by the editing core."""

    views: int = 0
    shares: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {'views': self.views, 'shares': self.shares}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Analytics':
        data = data or {}
        return cls(views=int(data.get('views') or 0), shares=int(data.get('shares') or 0))


@dataclass
class Tour:
    """
    Tour aggregate: metadata plus an ordered sequence of steps.

    `id` is None until the tour has been saved once. Step ids are unique
    within the tour and are never renumbered.
    """

    title: str = ''
    steps: List[Step] = field(default_factory=list)
    id: Optional[str] = None
    analytics: Analytics = field(default_factory=Analytics)
    is_public: bool = True
    created_at: datetime = field(default_factory=datetime.now)
    owner_id: Optional[str] = None

    def __post_init__(self):
        seen = set()
        for step in self.steps:
            if step.id is None:
                step.id = new_id()
            if step.id in seen:
                raise ValidationError(f"Duplicate step id '{step.id}' in tour")
            seen.add(step.id)

    # ------------------------------------------------------------
    # Step mutations
    # ------------------------------------------------------------

    def get_step(self, step_id) -> Optional[Step]:
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    def add_step(self, step: Step) -> Step:
        """Append a step, assigning an id if it has none."""
        if step.id is None:
            step.id = new_id()
        elif self.get_step(step.id) is not None:
            raise ValidationError(f"Step id '{step.id}' already exists in tour")
        self.steps.append(step)
        return step

    def update_step_text(self, step_id, text: str) -> None:
        """Replace a step's text. Unknown ids are ignored."""
        step = self.get_step(step_id)
        if step is not None:
            step.text = text

    def remove_step(self, step_id) -> None:
        """Remove a step. Unknown ids are ignored; survivors keep their order."""
        self.steps = [s for s in self.steps if s.id != step_id]

    # ------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------

    def to_persistable(self) -> Dict[str, Any]:
        """Shape handed to the persistence service: {id?, title, steps, analytics, isPublic}."""
        data = {
            'title': self.title,
            'steps': [s.to_dict() for s in self.steps],
            'analytics': self.analytics.to_dict(),
            'isPublic': self.is_public,
        }
        if self.id is not None:
            data['id'] = self.id
        return data

    def to_dict(self) -> Dict[str, Any]:
        """Full persisted shape including createdAt and ownerId."""
        data = self.to_persistable()
        data['id'] = self.id
        data['createdAt'] = self.created_at.isoformat()
        data['ownerId'] = self.owner_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Tour':
        if not isinstance(data, dict):
            raise ValidationError(f"Tour must be a mapping, got {type(data).__name__}")
        raw_steps = data.get('steps') or []
        if not isinstance(raw_steps, list):
            raise ValidationError("Tour steps must be a list")
        tour_id = data.get('id')
        is_public = data.get('isPublic')
        return cls(
            id=str(tour_id) if tour_id is not None else None,
            title=str(data.get('title') or ''),
            steps=[Step.from_dict(s) for s in raw_steps],
            analytics=Analytics.from_dict(data.get('analytics')),
            is_public=True if is_public is None else bool(is_public),
            created_at=_parse_datetime(data.get('createdAt')),
            owner_id=data.get('ownerId'),
        )

    def copy(self) -> 'Tour':
        return copy.deepcopy(self)
