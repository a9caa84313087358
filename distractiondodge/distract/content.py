from __future__ import annotations
import numpy as np
from typing import Dict, List, Tuple

# (title, icon) pairs the spawner draws from
APPS: List[Tuple[str, str]] = [
    ("Messages", "message.fill"),
    ("Calendar", "calendar"),
    ("Mail", "envelope.fill"),
    ("Reminders", "list.bullet"),
    ("FaceTime", "video.fill"),
    ("Weather", "cloud.rain.fill"),
    ("Photos", "photo.fill"),
    ("Clock", "alarm.fill"),
]

MESSAGES: Dict[str, List[str]] = {
    "Messages": ["Mom: Are you coming for dinner?", "Dad: Just landed at the airport",
                 "John: Let's meet for coffee", "Sara: Don't forget about tomorrow",
                 "Alex: Check out this link"],
    "Calendar": ["Team Meeting in 15 minutes", "Doctor's Appointment at 2 PM",
                 "Project Deadline Tomorrow", "Lunch with colleagues", "Weekly Review at 4 PM"],
    "Mail": ["Weekly Report Due Today", "New email from HR Department", "Meeting agenda updated",
             "Invoice received", "Travel itinerary confirmed"],
    "Reminders": ["Pick up groceries", "Call the dentist", "Pay electricity bill",
                  "Submit expense report", "Book flight tickets"],
    "FaceTime": ["Missed call from Dad", "Mom wants to FaceTime", "Incoming call from John",
                 "Video call request", "Group call from Family"],
    "Weather": ["Rain expected in your area", "Temperature dropping tonight", "High winds alert",
                "Clear skies this afternoon", "Storm warning for tonight"],
    "Photos": ["New Memory: Last Summer", "Photos from your trip", "Sharing suggestion: Beach Day",
               "New shared album invite", "Featured photos selected"],
    "Clock": ["Alarm for 7:00 AM", "Timer completed", "Bedtime in 30 minutes",
              "Wake up alarm set", "Timer paused"],
}

FALLBACK_MESSAGE = "New Notification"

def random_message(app: str, rng: np.random.Generator) -> str:
    msgs = MESSAGES.get(app)
    if not msgs: return FALLBACK_MESSAGE
    return msgs[int(rng.integers(len(msgs)))]

def random_payload(rng: np.random.Generator) -> Dict[str, str]:
    title, icon = APPS[int(rng.integers(len(APPS)))]
    return {"title": title, "message": random_message(title, rng), "icon": icon}
