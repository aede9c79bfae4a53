"""GUI package - tkinter presentation.

Modules:
    - host: Tk after() loop as the engine's timer host
    - theme: Colours, fonts, card geometry
    - screens: Onboarding, dive, completion
    - app: Root window and screen flow
"""
