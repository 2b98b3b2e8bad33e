"""Canned texts broadcast on behalf of the site owner."""

AUTO_REPLIES = (
	"Thanks for your message! I'll get back to you soon.",
	"Great question! Let me know if you need more details.",
	"I appreciate your interest in my work!",
	"Feel free to ask anything about my projects.",
	"Thanks for visiting my portfolio!",
)

ANNOUNCEMENTS = (
	"Welcome to my portfolio! Feel free to explore my projects.",
	"Check out my latest projects in the projects section!",
	"Have questions? Use the live chat to get in touch!",
	"Don't forget to check out my skills and experience!",
	"Thanks for visiting! I hope you enjoy exploring my work.",
)

ADMIN_SENDER = "admin"
VISITOR_LEFT_TEXT = "A visitor left the site"
