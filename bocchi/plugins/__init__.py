"""Plugins shipped with the bundled chat bot."""