"""Deterministic goal templates keyed by specific goal id or broad category."""
from __future__ import annotations

import math
from typing import Any, Callable, Dict, List, Optional, Sequence

from goalcraft.api.schemas.goal_spec import Gamification, GoalSpec, Milestone, Tracker
from goalcraft.services.goal_classifier import Classification
from goalcraft.services.timeframe import Timeframe, total_weeks

LANGUAGES = ["spanish", "french", "german", "italian", "portuguese", "chinese", "japanese", "korean"]

SPECIFIC_GOAL_GAMIFICATION = {"xp_rate": 15, "badges": ["First Attempt", "Getting Better", "Master Level"]}

# Tracker targets are either a fixed number ("target") or a share of the
# available days ("per_day"), floored and kept at least 1.
SPECIFIC_GOAL_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "sourdough": {
        "title": "Master Sourdough Baking",
        "category": "creative",
        "target": "Bake perfect sourdough loaves",
        "trackers": [
            {"name": "Loaves Baked", "type": "counter", "target": 20},
            {"name": "Starter Days", "type": "counter", "per_day": 0.8},
            {"name": "Successful Bakes", "type": "counter", "target": 15},
        ],
        "motivation": [
            "Every loaf is a step toward mastery! 🍞",
            "Patience and practice make perfect bread",
            "Your starter is alive - nurture it daily",
            "The smell of fresh bread is worth the effort",
            "Sourdough is an art form - you're the artist!",
        ],
    },
    "cooking": {
        "title": "Become a Cooking Master",
        "category": "creative",
        "target": "Cook amazing meals confidently",
        "trackers": [
            {"name": "Recipes Mastered", "type": "counter", "target": 30},
            {"name": "Cooking Days", "type": "counter", "per_day": 0.7},
            {"name": "New Techniques", "type": "counter", "target": 10},
        ],
        "motivation": [
            "Every dish is a delicious experiment! 👨‍🍳",
            "Cooking is love made visible",
            "Master the basics, then get creative",
            "Your kitchen is your laboratory",
            "Great chefs are made, not born!",
        ],
    },
    "juggling": {
        "title": "Learn to Juggle Like a Pro",
        "category": "creative",
        "target": "Juggle 3 balls consistently",
        "trackers": [
            {"name": "Practice Sessions", "type": "counter", "per_day": 0.8},
            {"name": "Consecutive Catches", "type": "number", "target": 50},
            {"name": "Tricks Learned", "type": "counter", "target": 5},
        ],
        "motivation": [
            "Drop the ball? Pick it up and try again! 🤹",
            "Juggling is all about rhythm and patience",
            "Every drop teaches you something new",
            "Soon you'll be the life of the party!",
            "Practice makes permanent, not perfect",
        ],
    },
    "photography": {
        "title": "Master Photography",
        "category": "creative",
        "target": "Build stunning photo portfolio",
        "trackers": [
            {"name": "Photos Taken", "type": "counter", "target": 500},
            {"name": "Portfolio Photos", "type": "counter", "target": 50},
            {"name": "Techniques Learned", "type": "counter", "target": 15},
        ],
        "motivation": [
            "Every click captures a moment in time! 📸",
            "Light is your paintbrush, the world your canvas",
            "The best camera is the one you have with you",
            "Photography is about seeing, not just looking",
            "Your unique perspective matters!",
        ],
    },
    "lucid_dreaming": {
        "title": "Master Lucid Dreaming",
        "category": "personal",
        "target": "Achieve consistent lucid dreams",
        "trackers": [
            {"name": "Dream Journal Entries", "type": "counter", "per_day": 0.8},
            {"name": "Lucid Dreams", "type": "counter", "target": 10},
            {"name": "Reality Checks", "type": "counter", "per_day": 5},
        ],
        "motivation": [
            "Your dreams are your playground! 🌙",
            "Awareness in dreams leads to awareness in life",
            "Every dream journal entry brings you closer",
            "Reality checks become second nature",
            "The dream world awaits your consciousness!",
        ],
    },
    "youtube": {
        "title": "Build YouTube Channel",
        "category": "business",
        "target": "Grow successful YouTube channel",
        "trackers": [
            {"name": "Videos Published", "type": "counter", "target": 50},
            {"name": "Subscribers", "type": "counter", "target": 1000},
            {"name": "Total Views", "type": "number", "target": 10000},
        ],
        "motivation": [
            "Every video is a step toward your audience! 📹",
            "Consistency beats perfection on YouTube",
            "Your unique voice matters in the noise",
            "Subscribers are people who believe in you",
            "The algorithm rewards authentic creators!",
        ],
    },
    "day_trading": {
        "title": "Master Day Trading",
        "category": "financial",
        "target": "Become profitable day trader",
        "trackers": [
            {"name": "Trading Days", "type": "counter", "per_day": 0.7},
            {"name": "Profitable Trades", "type": "counter", "target": 100},
            {"name": "Study Hours", "type": "number", "unit": "hours", "target": 200},
        ],
        "motivation": [
            "Discipline and patience create profits! 📈",
            "Every loss is a lesson in disguise",
            "Risk management is your best friend",
            "The market rewards prepared minds",
            "Consistency beats home runs in trading!",
        ],
    },
    "treehouse": {
        "title": "Build a Treehouse",
        "category": "creative",
        "target": "Complete amazing treehouse for kids",
        "trackers": [
            {"name": "Planning Hours", "type": "number", "unit": "hours", "target": 20},
            {"name": "Build Days", "type": "counter", "per_day": 0.3},
            {"name": "Materials Acquired", "type": "percentage", "target": 100},
        ],
        "motivation": [
            "Building memories one plank at a time! 🏠",
            "Your kids will treasure this forever",
            "Every nail brings the dream closer to reality",
            "Safety first, fun second, memories forever",
            "The best playground is the one you build yourself!",
        ],
    },
    "vegetable_garden": {
        "title": "Grow Vegetable Garden",
        "category": "creative",
        "target": "Become self-sufficient with vegetables",
        "trackers": [
            {"name": "Plants Growing", "type": "counter", "target": 20},
            {"name": "Harvest Days", "type": "counter", "per_day": 0.4},
            {"name": "Vegetables Harvested", "type": "counter", "target": 100},
        ],
        "motivation": [
            "From seed to table - you're growing life! 🌱",
            "Every plant is a step toward self-sufficiency",
            "Nature rewards patience and care",
            "Fresh vegetables taste like victory",
            "You're feeding your family with your own hands!",
        ],
    },
    "gardening": {
        "title": "Grow a Thriving Garden",
        "category": "creative",
        "target": "Keep a healthy, productive garden",
        "trackers": [
            {"name": "Plants Growing", "type": "counter", "target": 15},
            {"name": "Garden Days", "type": "counter", "per_day": 0.5},
            {"name": "Garden Setup", "type": "percentage", "target": 100},
        ],
        "motivation": [
            "Every seed is a promise of something beautiful! 🌻",
            "Gardens grow one small care at a time",
            "Dirty hands, happy heart",
            "Nature rewards patience and care",
            "Your garden reflects your consistency!",
        ],
    },
    "beatboxing": {
        "title": "Master Beatboxing",
        "category": "creative",
        "target": "Join a band as beatboxer",
        "trackers": [
            {"name": "Practice Sessions", "type": "counter", "per_day": 0.8},
            {"name": "Beats Mastered", "type": "counter", "target": 15},
            {"name": "Performance Ready", "type": "percentage", "target": 100},
        ],
        "motivation": [
            "Your mouth is your instrument! 🎵",
            "Every beat brings you closer to the stage",
            "Rhythm is in your soul - let it out",
            "Bands need beatboxers - be their missing piece",
            "Make music with nothing but your voice!",
        ],
    },
    "origami": {
        "title": "Master Origami",
        "category": "creative",
        "target": "Teach origami to others",
        "trackers": [
            {"name": "Models Learned", "type": "counter", "target": 50},
            {"name": "Practice Hours", "type": "number", "unit": "hours", "per_day": 2},
            {"name": "People Taught", "type": "counter", "target": 10},
        ],
        "motivation": [
            "Paper becomes art in your hands! 📜",
            "Patience and precision create beauty",
            "Every fold is a meditation",
            "Teaching others multiplies the joy",
            "Ancient art, modern master - that's you!",
        ],
    },
    "scuba": {
        "title": "Become Scuba Diving Instructor",
        "category": "career",
        "target": "Get certified as scuba instructor",
        "trackers": [
            {"name": "Certification Levels", "type": "counter", "target": 5},
            {"name": "Dive Hours", "type": "number", "unit": "hours", "target": 100},
            {"name": "Students Taught", "type": "counter", "target": 20},
        ],
        "motivation": [
            "The ocean is calling - answer with expertise! 🌊",
            "Every dive deepens your knowledge",
            "Safety first, adventure always",
            "Share the underwater world with others",
            "Turn your passion into your profession!",
        ],
    },
    "public_speaking": {
        "title": "Overcome Fear of Public Speaking",
        "category": "personal",
        "target": "Speak confidently in public",
        "trackers": [
            {"name": "Practice Sessions", "type": "counter", "per_day": 0.6},
            {"name": "Speeches Given", "type": "counter", "target": 10},
            {"name": "Confidence Level", "type": "percentage", "target": 100},
        ],
        "motivation": [
            "Your voice deserves to be heard! 🎤",
            "Every speech makes you stronger",
            "Fear is just excitement without breath",
            "The audience wants you to succeed",
            "Confidence grows with every word spoken!",
        ],
    },
    "minimalism": {
        "title": "Become Minimalist",
        "category": "personal",
        "target": "Declutter life and embrace minimalism",
        "trackers": [
            {"name": "Items Decluttered", "type": "counter", "target": 500},
            {"name": "Rooms Organized", "type": "counter", "target": 8},
            {"name": "Minimalist Days", "type": "counter", "per_day": 0.8},
        ],
        "motivation": [
            "Less stuff, more life! ✨",
            "Every item removed creates space for joy",
            "Minimalism is maximum freedom",
            "Own less, live more",
            "Simplicity is the ultimate sophistication!",
        ],
    },
    "friendship": {
        "title": "Build Genuine Friendships",
        "category": "social",
        "target": "Make 5 new genuine friends",
        "trackers": [
            {"name": "New People Met", "type": "counter", "target": 25},
            {"name": "Deep Conversations", "type": "counter", "target": 15},
            {"name": "Genuine Friends", "type": "counter", "target": 5},
        ],
        "motivation": [
            "Friendship is life's greatest treasure! 👥",
            "Every conversation is a potential connection",
            "Be the friend you want to have",
            "Quality over quantity in relationships",
            "Your tribe is out there - keep looking!",
        ],
    },
    "reconnect_friends": {
        "title": "Reconnect with Old Friends",
        "category": "social",
        "target": "Strengthen bonds with old friends",
        "trackers": [
            {"name": "Friends Contacted", "type": "counter", "target": 15},
            {"name": "Meetups Organized", "type": "counter", "target": 8},
            {"name": "Bonds Strengthened", "type": "counter", "target": 10},
        ],
        "motivation": [
            "Old friends are life's greatest gifts! 💝",
            "Time apart makes reunion sweeter",
            "Reach out - they miss you too",
            "Shared memories are priceless treasures",
            "Friendship transcends time and distance!",
        ],
    },
    "calligraphy": {
        "title": "Master Calligraphy",
        "category": "creative",
        "target": "Create beautiful calligraphy art",
        "trackers": [
            {"name": "Practice Sessions", "type": "counter", "per_day": 0.8},
            {"name": "Styles Learned", "type": "counter", "target": 5},
            {"name": "Artworks Created", "type": "counter", "target": 20},
        ],
        "motivation": [
            "Every stroke is a work of art! ✒️",
            "Beautiful writing is meditation in motion",
            "Your hand creates what your heart feels",
            "Patience and practice create perfection",
            "Ancient art, modern master!",
        ],
    },
    "magic_tricks": {
        "title": "Learn Magic Tricks",
        "category": "creative",
        "target": "Amaze friends with magic",
        "trackers": [
            {"name": "Tricks Learned", "type": "counter", "target": 25},
            {"name": "Practice Hours", "type": "number", "unit": "hours", "per_day": 2},
            {"name": "Performances Given", "type": "counter", "target": 10},
        ],
        "motivation": [
            "Magic is wonder made visible! 🎩",
            "Every trick mastered is a moment of amazement",
            "Practice makes the impossible possible",
            "Your audience believes in magic because of you",
            "The real magic is in bringing joy to others!",
        ],
    },
    "pushups": {
        "title": "Master 100 Push-ups",
        "category": "fitness",
        "target": "Do 100 push-ups in a row",
        "trackers": [
            {"name": "Max Push-ups", "type": "number", "target": 100},
            {"name": "Training Days", "type": "counter", "per_day": 0.8},
            {"name": "Total Push-ups", "type": "counter", "target": 5000},
        ],
        "motivation": [
            "Every push-up builds unstoppable strength! 💪",
            "Your body is capable of amazing things",
            "100 push-ups = 100% dedication",
            "Strength isn't given, it's earned",
            "Push through the burn, embrace the power!",
        ],
    },
    "meditation": {
        "title": "Daily Meditation Practice",
        "category": "health",
        "target": "Find inner peace through meditation",
        "trackers": [
            {"name": "Meditation Days", "type": "counter", "per_day": 0.9},
            {"name": "Total Minutes", "type": "number", "unit": "minutes", "per_day": 20},
            {"name": "Peaceful Moments", "type": "counter", "per_day": 0.7},
        ],
        "motivation": [
            "Peace begins with a single breath 🧘",
            "Every moment of stillness is a victory",
            "Your mind is training for tranquility",
            "Inner peace is your natural state",
            "Meditation is not escape, it's coming home",
        ],
    },
    "reading": {
        "title": "Reading Challenge",
        "category": "learning",
        "target": "Read 52 books this year",
        "trackers": [
            {"name": "Books Read", "type": "counter", "target": 52},
            {"name": "Pages Read", "type": "counter", "target": 15000},
            {"name": "Reading Days", "type": "counter", "per_day": 0.8},
        ],
        "motivation": [
            "Every book is a new adventure! 📚",
            "Reading is dreaming with open eyes",
            "Knowledge grows with every page turned",
            "Books are portals to infinite worlds",
            "Your mind expands with every story!",
        ],
    },
    "podcast": {
        "title": "Launch Successful Podcast",
        "category": "business",
        "target": "Get 1000 podcast listeners",
        "trackers": [
            {"name": "Episodes Published", "type": "counter", "target": 26},
            {"name": "Total Listeners", "type": "counter", "target": 1000},
            {"name": "Recording Hours", "type": "number", "unit": "hours", "target": 100},
        ],
        "motivation": [
            "Your voice deserves to be heard! 🎙️",
            "Every episode builds your audience",
            "Consistency creates loyal listeners",
            "Share your passion with the world",
            "Podcasting is storytelling for the digital age!",
        ],
    },
    "travel": {
        "title": "World Travel Adventure",
        "category": "personal",
        "target": "Visit 10 new countries",
        "trackers": [
            {"name": "Countries Visited", "type": "counter", "target": 10},
            {"name": "Cities Explored", "type": "counter", "target": 25},
            {"name": "Cultural Experiences", "type": "counter", "target": 50},
        ],
        "motivation": [
            "The world is your classroom! 🌍",
            "Every country teaches you something new",
            "Travel broadens the mind and soul",
            "Collect moments, not just souvenirs",
            "Adventure awaits beyond your comfort zone!",
        ],
    },
    "wine": {
        "title": "Become Wine Connoisseur",
        "category": "learning",
        "target": "Master wine knowledge and become sommelier",
        "trackers": [
            {"name": "Wines Tasted", "type": "counter", "target": 200},
            {"name": "Wine Regions Studied", "type": "counter", "target": 15},
            {"name": "Certification Progress", "type": "percentage", "target": 100},
        ],
        "motivation": [
            "Every sip is a journey through terroir! 🍷",
            "Wine is poetry in a bottle",
            "Your palate is developing sophistication",
            "Great wines tell stories of their land",
            "Become the sommelier you dream to be!",
        ],
    },
    "guitar": {
        "title": "Learn Guitar & Perform",
        "category": "creative",
        "target": "Play guitar at open mic nights",
        "trackers": [
            {"name": "Practice Hours", "type": "number", "unit": "hours", "per_day": 2},
            {"name": "Songs Learned", "type": "counter", "target": 20},
            {"name": "Performances Given", "type": "counter", "target": 5},
        ],
        "motivation": [
            "Every chord brings you closer to the stage! 🎸",
            "Music is the universal language of the soul",
            "Your fingers are learning to speak music",
            "Open mic nights await your unique sound",
            "Strum your way to musical mastery!",
        ],
    },
    "weight_loss": {
        "title": "Ultimate Fitness Transformation",
        "category": "fitness",
        "target": "Lose 30 pounds and get in best shape",
        "trackers": [
            {"name": "Weight Lost", "type": "number", "unit": "lbs", "target": 30},
            {"name": "Workout Days", "type": "counter", "per_day": 0.8},
            {"name": "Healthy Meals", "type": "counter", "per_day": 2},
        ],
        "motivation": [
            "Every pound lost is a victory won! 💪",
            "Your body is transforming into its best version",
            "Discipline today, confidence tomorrow",
            "You're not just losing weight, you're gaining life",
            "The best shape of your life awaits!",
        ],
    },
    "tiny_house": {
        "title": "Build Tiny House & Live Off-Grid",
        "category": "creative",
        "target": "Complete tiny house and live sustainably",
        "trackers": [
            {"name": "Construction Progress", "type": "percentage", "target": 100},
            {"name": "Skills Learned", "type": "counter", "target": 15},
            {"name": "Sustainable Systems", "type": "counter", "target": 8},
        ],
        "motivation": [
            "Small house, big dreams! 🏠",
            "Building your future one nail at a time",
            "Simplicity is the ultimate sophistication",
            "Off-grid living = ultimate freedom",
            "Your sustainable paradise awaits!",
        ],
    },
    "early_riser": {
        "title": "Become 5 AM Productivity Master",
        "category": "personal",
        "target": "Wake up at 5 AM daily and boost productivity",
        "trackers": [
            {"name": "5 AM Wake-ups", "type": "counter", "per_day": 0.9},
            {"name": "Morning Routine Days", "type": "counter", "per_day": 0.8},
            {"name": "Productive Hours", "type": "number", "unit": "hours", "per_day": 2},
        ],
        "motivation": [
            "The early bird catches the worm! 🌅",
            "5 AM is your secret weapon for success",
            "While others sleep, you're building your future",
            "Morning discipline creates daily victories",
            "Productivity starts before the world wakes up!",
        ],
    },
    "hiking": {
        "title": "Hike the Appalachian Trail",
        "category": "fitness",
        "target": "Complete the entire Appalachian Trail",
        "trackers": [
            {"name": "Miles Hiked", "type": "number", "unit": "miles", "target": 2190},
            {"name": "Training Days", "type": "counter", "per_day": 0.8},
            {"name": "Gear Acquired", "type": "percentage", "target": 100},
        ],
        "motivation": [
            "Every step brings you closer to the summit! 🥾",
            "The trail teaches you about yourself",
            "Mountains are calling and you must go",
            "One foot in front of the other",
            "The journey of 2,190 miles begins with a single step!",
        ],
    },
    "chess": {
        "title": "Master Chess & Compete",
        "category": "learning",
        "target": "Compete in chess tournaments",
        "trackers": [
            {"name": "Games Played", "type": "counter", "target": 500},
            {"name": "Rating Points", "type": "number", "target": 1800},
            {"name": "Tournaments Entered", "type": "counter", "target": 5},
        ],
        "motivation": [
            "Every move teaches you strategy! ♟️",
            "Chess is the gymnasium of the mind",
            "Think three moves ahead",
            "Patience and tactics win games",
            "Become the grandmaster of your own game!",
        ],
    },
    "food_truck": {
        "title": "Launch Food Truck Business",
        "category": "business",
        "target": "Start successful food truck",
        "trackers": [
            {"name": "Business Plan Progress", "type": "percentage", "target": 100},
            {"name": "Permits Obtained", "type": "counter", "target": 8},
            {"name": "Revenue", "type": "number", "unit": "$", "target": 50000},
        ],
        "motivation": [
            "Your culinary dreams are on wheels! 🚚",
            "Every meal served builds your business",
            "Food brings people together",
            "Your recipes deserve to be shared",
            "Success is served one customer at a time!",
        ],
    },
    "freelance_design": {
        "title": "Become Freelance Designer",
        "category": "business",
        "target": "Build successful freelance design career",
        "trackers": [
            {"name": "Clients Acquired", "type": "counter", "target": 20},
            {"name": "Projects Completed", "type": "counter", "target": 50},
            {"name": "Monthly Income", "type": "number", "unit": "$", "target": 5000},
        ],
        "motivation": [
            "Your creativity pays the bills! 🎨",
            "Every design tells a story",
            "Freelance freedom is worth the hustle",
            "Your portfolio is your passport to success",
            "Design the career you want!",
        ],
    },
    "rock_climbing": {
        "title": "Master Rock Climbing",
        "category": "fitness",
        "target": "Conquer your first mountain",
        "trackers": [
            {"name": "Climbing Sessions", "type": "counter", "per_day": 0.6},
            {"name": "Routes Completed", "type": "counter", "target": 100},
            {"name": "Skill Level", "type": "percentage", "target": 100},
        ],
        "motivation": [
            "Reach new heights every day! 🧗",
            "The mountain doesn't care about your excuses",
            "Grip strength builds character",
            "Every hold teaches you perseverance",
            "The summit is just the beginning!",
        ],
    },
    "triathlon": {
        "title": "Complete a Triathlon",
        "category": "fitness",
        "target": "Finish your first triathlon",
        "trackers": [
            {"name": "Training Sessions", "type": "counter", "per_day": 0.8},
            {"name": "Swim Distance", "type": "number", "unit": "miles", "target": 50},
            {"name": "Bike Distance", "type": "number", "unit": "miles", "target": 500},
        ],
        "motivation": [
            "Swim, bike, run - you're unstoppable! 🏊",
            "Three sports, one incredible achievement",
            "Your body is capable of amazing things",
            "Endurance is built one workout at a time",
            "Cross that finish line like a champion!",
        ],
    },
    "martial_arts": {
        "title": "Earn Black Belt",
        "category": "fitness",
        "target": "Achieve black belt in martial arts",
        "trackers": [
            {"name": "Training Sessions", "type": "counter", "per_day": 0.8},
            {"name": "Belt Levels", "type": "counter", "target": 8},
            {"name": "Techniques Mastered", "type": "counter", "target": 50},
        ],
        "motivation": [
            "Discipline creates warriors! 🥋",
            "Every belt earned is a milestone conquered",
            "Martial arts builds body and character",
            "Respect, discipline, perseverance",
            "The black belt is just the beginning!",
        ],
    },
    "dating": {
        "title": "Improve Dating Life",
        "category": "social",
        "target": "Find meaningful relationship",
        "trackers": [
            {"name": "Dates Attended", "type": "counter", "target": 20},
            {"name": "Confidence Level", "type": "percentage", "target": 100},
            {"name": "Social Skills Practice", "type": "counter", "per_day": 0.5},
        ],
        "motivation": [
            "Love starts with loving yourself! 💕",
            "Every conversation is practice",
            "Authenticity attracts the right person",
            "Confidence is your best accessory",
            "Your person is out there - keep looking!",
        ],
    },
    "parenting": {
        "title": "Become Better Parent",
        "category": "personal",
        "target": "Spend quality time with kids",
        "trackers": [
            {"name": "Quality Time Hours", "type": "number", "unit": "hours", "per_day": 2},
            {"name": "Activities Together", "type": "counter", "target": 50},
            {"name": "Parenting Skills", "type": "percentage", "target": 100},
        ],
        "motivation": [
            "Your kids need you, not your perfection! 👨‍👩‍👧",
            "Quality time is the best gift you can give",
            "Every moment matters in their memory",
            "Parenting is the hardest job you'll ever love",
            "You're shaping the future, one hug at a time!",
        ],
    },
    "survival": {
        "title": "Master Survival Skills",
        "category": "personal",
        "target": "Learn wilderness survival",
        "trackers": [
            {"name": "Skills Learned", "type": "counter", "target": 20},
            {"name": "Camping Trips", "type": "counter", "target": 10},
            {"name": "Survival Challenges", "type": "counter", "target": 5},
        ],
        "motivation": [
            "Nature is your classroom! 🏕️",
            "Self-reliance builds confidence",
            "Every skill could save your life",
            "The wilderness teaches what matters",
            "Become one with the wild!",
        ],
    },
    "language_learning": {
        "title": "Polyglot Challenge",
        "category": "learning",
        "target": "Learn multiple languages",
        "trackers": [
            {"name": "Languages Started", "type": "counter", "target": 3},
            {"name": "Study Hours", "type": "number", "unit": "hours", "per_day": 3},
            {"name": "Conversations Held", "type": "counter", "target": 50},
        ],
        "motivation": [
            "Every language opens a new world! 🌍",
            "Polyglots see the world differently",
            "Language is the key to culture",
            "Your brain grows with every word",
            "Speak the world into existence!",
        ],
    },
}


def clamp_milestone_weeks(milestones: Sequence[Milestone]) -> List[Milestone]:
    """Force week >= 1 on the first milestone and week > previous on the rest.

    Short goals make the proportional formulas collide (or go to zero); later
    milestones are pushed forward rather than dropped.
    """
    clamped: List[Milestone] = []
    previous = 0
    for milestone in milestones:
        week = max(milestone.week, previous + 1)
        if week != milestone.week:
            milestone = milestone.model_copy(update={"week": week})
        clamped.append(milestone)
        previous = week
    return clamped


MAX_TITLE_LENGTH = 120


def shorten_title(title: str) -> str:
    """Keep titles short enough to be used inside storage keys."""
    if len(title) < MAX_TITLE_LENGTH:
        return title
    return f"{title[: MAX_TITLE_LENGTH - 3]}..."


def _days_share(duration_days: int, ratio: float) -> int:
    return max(1, math.floor(duration_days * ratio))


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,}"


def _build_trackers(entries: Sequence[Dict[str, Any]], duration_days: int) -> List[Tracker]:
    trackers: List[Tracker] = []
    for entry in entries:
        if "per_day" in entry:
            target: float = _days_share(duration_days, entry["per_day"])
        else:
            target = entry["target"]
        trackers.append(Tracker(name=entry["name"], type=entry["type"], unit=entry.get("unit"), target=target))
    return trackers


def _milestone(week: int, title: str, description: str, target: str) -> Milestone:
    return Milestone(week=max(0, week), title=title, description=description, target=target)


def _spec(
    *,
    title: str,
    timeframe: Timeframe,
    category: str,
    target: str,
    milestones: Sequence[Milestone],
    trackers: Sequence[Tracker],
    motivation: Sequence[str],
    xp_rate: float,
    badges: Sequence[str],
) -> GoalSpec:
    return GoalSpec(
        title=title,
        duration_display=timeframe.display,
        duration_days=timeframe.days,
        category=category,
        target=target,
        milestones=clamp_milestone_weeks(milestones),
        trackers=list(trackers),
        motivation=list(motivation),
        gamification=Gamification(streaks_enabled=True, xp_rate=xp_rate, badges=list(badges)),
        source="rules",
    )


def _mastery_milestones(duration_days: int, title: str) -> List[Milestone]:
    weeks = total_weeks(duration_days)
    return [
        _milestone(math.floor(weeks * 0.2), "Foundation", "Learn the basics", "Understand fundamentals"),
        _milestone(math.floor(weeks * 0.5), "Practice", "Build skills through repetition", "Consistent practice routine"),
        _milestone(math.floor(weeks * 0.8), "Refinement", "Perfect your technique", "Noticeable improvement"),
        _milestone(
            weeks - 1,
            "Mastery",
            "Achieve your goal",
            "Perfect loaf" if "Sourdough" in title else "Goal achieved",
        ),
    ]


def generate_specific_goal_spec(goal_id: str, text: str, timeframe: Timeframe) -> GoalSpec:
    template = SPECIFIC_GOAL_TEMPLATES.get(goal_id)
    if template is None:
        raise KeyError(f"Unknown specific goal: {goal_id}")
    return _spec(
        title=template["title"],
        timeframe=timeframe,
        category=template["category"],
        target=template["target"],
        milestones=_mastery_milestones(timeframe.days, template["title"]),
        trackers=_build_trackers(template["trackers"], timeframe.days),
        motivation=template["motivation"],
        **SPECIFIC_GOAL_GAMIFICATION,
    )


def _fitness_spec(text: str, timeframe: Timeframe) -> GoalSpec:
    lowered = text.lower()
    days = timeframe.days
    weeks = total_weeks(days)
    is_marathon = "marathon" in lowered
    is_half = is_marathon and "half" in lowered
    distance = (13.1 if is_half else 26.2) if is_marathon else 5
    if is_marathon:
        title = "Half Marathon Training" if is_half else "Marathon Training"
    else:
        title = "Fitness Goal"

    if weeks >= 12:
        milestones = [
            _milestone(2, "Build Base Fitness", "Complete 3 easy runs per week", "3 miles longest run"),
            _milestone(6, "Increase Distance", "Build weekly mileage", f"{math.floor(distance * 0.4)} mile long run"),
            _milestone(10, "Peak Training", "Longest training runs", f"{math.floor(distance * 0.8)} mile long run"),
            _milestone(weeks - 1, "Taper & Rest", "Reduce volume, stay fresh", "Race ready!"),
        ]
    else:
        milestones = [
            _milestone(2, "Foundation", "Establish routine", "2 mile run"),
            _milestone(weeks // 2, "Build Up", "Increase distance", f"{math.floor(distance * 0.6)} miles"),
            _milestone(weeks - 1, "Final Push", "Peak fitness", "Goal achieved!"),
        ]

    return _spec(
        title=title,
        timeframe=timeframe,
        category="fitness",
        target=f"{_format_number(distance)} miles",
        milestones=milestones,
        trackers=[
            Tracker(name="Weekly Miles", type="number", unit="miles", target=round(distance * 0.8, 2)),
            Tracker(name="Longest Run", type="number", unit="miles", target=distance),
            Tracker(name="Training Days", type="counter", target=_days_share(days, 0.6)),
        ],
        motivation=[
            "Every mile is progress toward your goal! 🏃",
            "Trust the process - your body is getting stronger",
            "Small steps today, big achievements tomorrow",
            "You're building the discipline that lasts a lifetime",
            "Remember why you started when it gets tough",
        ],
        xp_rate=10,
        badges=["First 5K", "Consistency Champion", "Distance Destroyer"],
    )


def extract_language(text: str) -> Optional[str]:
    lowered = text.lower()
    for language in LANGUAGES:
        if language in lowered:
            return language.capitalize()
    return None


def _learning_spec(text: str, timeframe: Timeframe) -> GoalSpec:
    language = extract_language(text) or "Spanish"
    days = timeframe.days
    weeks = total_weeks(days)
    return _spec(
        title=f"Learn {language}",
        timeframe=timeframe,
        category="learning",
        target=f"Conversational {language}",
        milestones=[
            _milestone(2, "Basics", "Learn essential phrases", "100 vocabulary words"),
            _milestone(math.floor(weeks * 0.3), "Grammar Foundation", "Master basic grammar", "Present tense verbs"),
            _milestone(math.floor(weeks * 0.6), "Conversation", "Practice speaking", "500 vocabulary words"),
            _milestone(weeks - 1, "Fluency", "Confident communication", f"Conversational {language}"),
        ],
        trackers=[
            Tracker(name="Vocabulary Words", type="counter", target=1000),
            Tracker(name="Study Hours", type="number", unit="hours", target=days * 0.5),
            Tracker(name="Lessons Completed", type="counter", target=max(1, days // 2)),
        ],
        motivation=[
            "¡Excelente! Every word brings you closer to fluency 📚",
            "Language learning is a journey, not a destination",
            "Practice makes progress - you're doing great!",
            "Immerse yourself and watch the magic happen",
            "Mistakes are proof you're trying - keep going!",
        ],
        xp_rate=5,
        badges=["First 100 Words", "Study Streak", "Grammar Master"],
    )


def _writing_spec(text: str, timeframe: Timeframe) -> GoalSpec:
    is_novel = "novel" in text.lower()
    target_words = 80000 if is_novel else 20000
    days = timeframe.days
    weeks = total_weeks(days)
    quarter = target_words // 4
    return _spec(
        title="Write a Novel" if is_novel else "Writing Project",
        timeframe=timeframe,
        category="writing",
        target=f"{target_words:,} words",
        milestones=[
            _milestone(math.floor(weeks * 0.25), "First Quarter", "Story foundation", f"{quarter:,} words"),
            _milestone(math.floor(weeks * 0.5), "Halfway Point", "Plot development", f"{quarter * 2:,} words"),
            _milestone(math.floor(weeks * 0.75), "Three Quarters", "Climax and resolution", f"{quarter * 3:,} words"),
            _milestone(weeks - 1, "The End", "Complete first draft", f"{target_words:,} words"),
        ],
        trackers=[
            Tracker(name="Words Written", type="counter", target=target_words),
            Tracker(name="Daily Word Count", type="number", unit="words", target=max(1, target_words // days)),
            Tracker(name="Writing Days", type="counter", target=_days_share(days, 0.8)),
        ],
        motivation=[
            "Every word is a step closer to your masterpiece ✍️",
            "The first draft is just the beginning - keep writing!",
            "Your story matters - the world needs to hear it",
            "Writers write, even when inspiration is hiding",
            "Progress over perfection - you've got this!",
        ],
        xp_rate=1,
        badges=["First Chapter", "Word Warrior", "The End"],
    )


def _business_spec(text: str, timeframe: Timeframe) -> GoalSpec:
    days = timeframe.days
    return _spec(
        title="Business Goal",
        timeframe=timeframe,
        category="business",
        target="Launch successful business",
        milestones=[
            _milestone(days // 28, "Research & Planning", "Market research and business plan", "Business plan complete"),
            _milestone(days // 14, "MVP Development", "Build minimum viable product", "Product ready"),
            _milestone(math.floor(days * 0.75 / 7), "Launch & Marketing", "Go to market strategy", "First customers"),
            _milestone(days // 7 - 1, "Growth & Scale", "Optimize and expand", "Revenue targets met"),
        ],
        trackers=[
            Tracker(name="Revenue", type="number", unit="$", target=5000),
            Tracker(name="Customers", type="counter", target=50),
            Tracker(name="Work Hours", type="number", unit="hours", target=days * 2),
        ],
        motivation=[
            "Every entrepreneur started with a dream - you're making it real! 💼",
            "Building a business is building your future",
            "Focus on solving problems, success will follow",
            "Persistence beats perfection in business",
            "Your customers are waiting for what you're building",
        ],
        xp_rate=50,
        badges=["First Sale", "Customer Champion", "Revenue Rocket"],
    )


def _health_spec(text: str, timeframe: Timeframe) -> GoalSpec:
    days = timeframe.days
    return _spec(
        title="Health & Wellness Goal",
        timeframe=timeframe,
        category="health",
        target="Improved health and wellness",
        milestones=[
            _milestone(2, "Foundation", "Establish healthy routines", "Daily habits set"),
            _milestone(days // 14, "Consistency", "Build momentum", "2 weeks of consistency"),
            _milestone(math.floor(days * 0.6 / 7), "Progress", "See measurable improvements", "Noticeable changes"),
            _milestone(days // 7 - 1, "Lifestyle", "Sustainable healthy living", "New lifestyle achieved"),
        ],
        trackers=[
            Tracker(name="Healthy Days", type="counter", target=_days_share(days, 0.8)),
            Tracker(name="Sleep Hours", type="number", unit="hours", target=8),
            Tracker(name="Water Intake", type="number", unit="glasses", target=8),
        ],
        motivation=[
            "Your health is your greatest wealth! 🌱",
            "Small changes lead to big transformations",
            "You're investing in your future self",
            "Progress, not perfection, is the goal",
            "Every healthy choice is a victory",
        ],
        xp_rate=25,
        badges=["Healthy Start", "Consistency King", "Wellness Warrior"],
    )


def _creative_spec(text: str, timeframe: Timeframe) -> GoalSpec:
    days = timeframe.days
    return _spec(
        title="Creative Project",
        timeframe=timeframe,
        category="creative",
        target="Complete creative project",
        milestones=[
            _milestone(days // 28, "Inspiration", "Gather ideas and plan", "Project concept ready"),
            _milestone(days // 14, "Creation", "Start building/making", "25% complete"),
            _milestone(math.floor(days * 0.75 / 7), "Refinement", "Polish and improve", "75% complete"),
            _milestone(days // 7 - 1, "Completion", "Finish and share", "Project complete"),
        ],
        trackers=[
            Tracker(name="Creative Hours", type="number", unit="hours", target=days),
            Tracker(name="Project Progress", type="percentage", target=100),
            Tracker(name="Creative Days", type="counter", target=_days_share(days, 0.7)),
        ],
        motivation=[
            "Your creativity is a gift to the world! 🎨",
            "Art is not what you see, but what you make others see",
            "Every master was once a beginner",
            "Create something that makes you proud",
            "The world needs your unique perspective",
        ],
        xp_rate=15,
        badges=["Creative Spark", "Artistic Flow", "Masterpiece Maker"],
    )


def _general_spec(text: str, timeframe: Timeframe) -> GoalSpec:
    days = timeframe.days
    weeks = total_weeks(days)
    title = text.strip() or "My Goal"
    return _spec(
        title=shorten_title(title),
        timeframe=timeframe,
        category="general",
        target="Complete goal",
        milestones=[
            _milestone(math.floor(weeks * 0.25), "Getting Started", "Build momentum", "25% complete"),
            _milestone(math.floor(weeks * 0.5), "Halfway There", "Maintain consistency", "50% complete"),
            _milestone(math.floor(weeks * 0.75), "Final Stretch", "Push through challenges", "75% complete"),
            _milestone(weeks - 1, "Achievement", "Reach your goal", "100% complete"),
        ],
        trackers=[
            Tracker(name="Progress", type="percentage", target=100),
            Tracker(name="Days Active", type="counter", target=_days_share(days, 0.7)),
        ],
        motivation=[
            "You're making it happen, one day at a time! 🌟",
            "Consistency is the key to achieving any dream",
            "Believe in yourself - you've got what it takes",
            "Small progress is still progress",
            "Your future self will thank you for starting today",
        ],
        xp_rate=20,
        badges=["Getting Started", "Halfway Hero", "Goal Crusher"],
    )


CATEGORY_GENERATORS: Dict[str, Callable[[str, Timeframe], GoalSpec]] = {
    "fitness": _fitness_spec,
    "learning": _learning_spec,
    "writing": _writing_spec,
    "business": _business_spec,
    "health": _health_spec,
    "creative": _creative_spec,
    "general": _general_spec,
}


def generate_category_spec(category: str, text: str, timeframe: Timeframe) -> GoalSpec:
    generator = CATEGORY_GENERATORS.get(category, _general_spec)
    return generator(text, timeframe)


def build_rule_based_spec(text: str, classification: Classification, timeframe: Timeframe) -> GoalSpec:
    """Render the template the classifier picked for ``text``."""
    if classification.goal_id and classification.goal_id in SPECIFIC_GOAL_TEMPLATES:
        return generate_specific_goal_spec(classification.goal_id, text, timeframe)
    return generate_category_spec(classification.category or "general", text, timeframe)
