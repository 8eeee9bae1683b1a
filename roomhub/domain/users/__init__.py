"""Users domain - User directory"""
