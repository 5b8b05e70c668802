"""
SkillSwap client application package.

Wires the modules together (container) and renders them in the terminal (display).
"""
