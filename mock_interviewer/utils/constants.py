"""
Constants used throughout the Mock Interviewer application.
"""

# Session cookie
AUTH_COOKIE_NAME = "auth_token"
TOKEN_TTL_DAYS = 7
TOKEN_TTL_SECONDS = TOKEN_TTL_DAYS * 24 * 60 * 60

# Interview parameters
INTERVIEW_TYPES = {
    "technical": "Technical",
    "behavioral": "Behavioral",
    "mixed": "Mixed",
}

EXPERIENCE_LEVELS = {
    "junior": "Junior",
    "mid": "Mid",
    "senior": "Senior",
    "lead": "Lead",
    "principal": "Principal",
}

MIN_QUESTIONS = 1
MAX_QUESTIONS = 20
DEFAULT_LATEST_LIMIT = 20
MAX_LATEST_LIMIT = 100

# Characters the voice assistant cannot read aloud
FORBIDDEN_QUESTION_CHARS = ("/", "*")

INTERVIEW_COVERS = [
    "/covers/adobe.png",
    "/covers/amazon.png",
    "/covers/facebook.png",
    "/covers/hostinger.png",
    "/covers/pinterest.png",
    "/covers/quora.png",
    "/covers/reddit.png",
    "/covers/skype.png",
    "/covers/spotify.png",
    "/covers/telegram.png",
    "/covers/tiktok.png",
    "/covers/yahoo.png",
]

# Feedback categories, in the order they are reported
FEEDBACK_CATEGORIES = (
    "Communication Skills",
    "Technical Knowledge",
    "Problem-Solving",
    "Cultural & Role Fit",
    "Confidence & Clarity",
)

TRANSCRIPT_ROLES = ("user", "assistant", "system")

# Voice-agent session modes
SESSION_MODE_GENERATE = "generate"
SESSION_MODE_INTERVIEW = "interview"

# Voice-agent event names
EVENT_CALL_START = "call-start"
EVENT_CALL_END = "call-end"
EVENT_MESSAGE = "message"
EVENT_SPEECH_START = "speech-start"
EVENT_SPEECH_END = "speech-end"
EVENT_ERROR = "error"

# Assistant used when conducting a prepared interview. The agent fills
# {{questions}} from the variable values passed at call start.
INTERVIEWER_ASSISTANT = {
    "name": "Interviewer",
    "firstMessage": "Hello! Thank you for taking the time to speak with me today. I'm looking forward to learning more about you and your experience.",
    "transcriber": {
        "provider": "deepgram",
        "model": "nova-2",
        "language": "en",
    },
    "voice": {
        "provider": "11labs",
        "voiceId": "sarah",
        "stability": 0.4,
        "similarityBoost": 0.8,
        "speed": 0.9,
        "style": 0.5,
        "useSpeakerBoost": True,
    },
    "model": {
        "provider": "openai",
        "model": "gpt-4",
        "messages": [
            {
                "role": "system",
                "content": (
                    "You are a professional job interviewer conducting a real-time voice interview with a candidate. "
                    "Your goal is to assess their qualifications, motivation, and fit for the role.\n\n"
                    "Follow the structured question flow:\n{{questions}}\n\n"
                    "Listen actively to the candidate's responses and acknowledge them before moving on. "
                    "Ask brief follow-up questions if a response is vague. Keep the conversation smooth and controlled.\n\n"
                    "Be professional yet warm. Keep your answers short and to the point, as in a real voice interview. "
                    "When the questions are done, thank the candidate, tell them the company will reach out soon "
                    "with feedback, and end the conversation politely."
                ),
            }
        ],
    },
}

# Error messages
ERROR_GENERIC = "Something went wrong"
ERROR_ROUTE_NOT_FOUND = "Route not found"
ERROR_RATE_LIMITED = "Too many requests from this IP, please try again later."
ERROR_VOICE_AGENT = "Unable to start the call. Check your Vapi web token, workflow ID, and browser microphone permission."
