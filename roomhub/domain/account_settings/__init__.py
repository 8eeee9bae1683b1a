"""Account settings domain - Language, theme and notification preferences"""
