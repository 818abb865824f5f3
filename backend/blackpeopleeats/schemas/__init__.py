# Schemas package init
"""
BlackPeopleEats Backend — Pydantic Schemas

    - feed.py:       restaurants, users, follows, posts
    - highlights.py: highlights, search and checkout bodies
    - common.py:     error and health bodies
"""
