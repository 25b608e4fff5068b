"""Recipe Rebel service: community recipes with moderation and an AI dietician."""
