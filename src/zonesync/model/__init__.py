"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the GUI (Qt).
It deals with Locations, Time Zones, Work Hours and Colours.
"""
