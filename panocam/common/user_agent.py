#!/usr/bin/env python3
"""User agent checks used to pick player and input defaults."""

import re

MOBILE_USER_AGENT = re.compile(r"iPhone|iPad|iPod|Android|BlackBerry|IEMobile|Opera Mini", re.IGNORECASE)
FIREFOX_USER_AGENT = re.compile(r"Firefox", re.IGNORECASE)


def is_mobile_user_agent(user_agent: str) -> bool:
    return bool(MOBILE_USER_AGENT.search(user_agent or ""))


def is_firefox_user_agent(user_agent: str) -> bool:
    return bool(FIREFOX_USER_AGENT.search(user_agent or ""))
