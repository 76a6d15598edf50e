"""
Sample tours used when no backing store is configured.
"""

from datetime import datetime

from src.tours.models import Analytics, Step, Tour

_IMAGE_BASE = 'https://placehold.co/800x600/2563EB/ffffff?text='


def sample_tours():
    """Return fresh copies of the two demo tours."""
    now = datetime.now()
    return [
        Tour(
            id='tour-1',
            title='Getting Started with Arcade',
            steps=[
                Step(id='1', text='Welcome to your dashboard! This is where you can manage all of your product tours.',
                     image=_IMAGE_BASE + 'Dashboard+View'),
                Step(id='2', text='Click "Create New Tour" to start building your first guided experience.',
                     image=_IMAGE_BASE + 'Create+Tour+Button'),
                Step(id='3', text='Each tour is made of steps, which can include screenshots and descriptive text.',
                     image=_IMAGE_BASE + 'Tour+Editor'),
            ],
            analytics=Analytics(views=15, shares=3),
            is_public=True,
            created_at=now,
        ),
        Tour(
            id='tour-2',
            title='Advanced Settings Overview',
            steps=[
                Step(id='1', text="Our advanced settings allow you to customize your tour's appearance and behavior.",
                     image=_IMAGE_BASE + 'Advanced+Settings'),
                Step(id='2', text='You can change the theme from dark to light mode to match your website.',
                     image=_IMAGE_BASE + 'Theme+Settings'),
            ],
            analytics=Analytics(views=8, shares=1),
            is_public=False,
            created_at=now,
        ),
    ]
