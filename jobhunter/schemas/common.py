from typing import Literal

ApplicationStatus = Literal["saved", "applied", "interviewing", "offer", "rejected"]
DocumentType = Literal["resume", "cover_letter"]
NotificationFrequency = Literal["daily", "weekly"]
CareerItemType = Literal["role", "certification", "skill"]
CareerItemStatus = Literal["saved", "in_progress", "completed"]
RemotePreference = Literal["remote", "hybrid", "onsite", "any"]
SortBy = Literal["relevance", "date", "salary"]
