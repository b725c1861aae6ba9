"""Classification prompts and response schemas for customer messages."""

from models import ACTIONS, CATEGORIES, QUICK_CATEGORIES

CATEGORY_SYSTEM_PROMPT = """You are a message classifier for a consumer brand's customer inbox.

Categorize the user's message into exactly one of the following categories:

- **Love**: Expressions of affection, praise, or emotional connection to the brand or product.
- **Grievance**: Complaints, frustrations, or dissatisfaction.
- **Order Information**: Questions about shipping, tracking, invoices, or payment.
- **Product Information**: Questions about product features, ingredients, durability, availability, etc.
- **Business Queries**: Partnership, wholesale, sponsorship, or other B2B discussions.
- **Hiring**: Questions about open roles or applying for jobs.
- **Others**: Anything that does not clearly fit one of the categories above.

Respond with the single best category."""

CATEGORY_PROMPT = "categorize this message: {message}"

CATEGORY_SCHEMA = {
    "type": "object",
    "properties": {
        "category": {
            "type": "string",
            "description": "Category of the message",
            "enum": list(CATEGORIES),
        },
    },
    "required": ["category"],
    "additionalProperties": False,
}

CONFIDENCE_SYSTEM_PROMPT = """You score how safe it is to let automation handle a customer message without human review.

You are given the message and the category it was assigned. Score from 60 to 100:

## Scoring
1. Start from a base score of 80.
2. Add up to +15 when the message has a single clear intent that matches the category.
3. Add up to +5 when the wording is explicit and needs no extra context to answer.
4. Subtract up to -15 for ambiguity, mixed intents, or a category that only partly fits.
5. Subtract up to -10 for sarcasm, strong emotion, or missing details (order numbers, product names).
6. Subtract up to -15 for anything with legal, safety, health, or refund risk.

Never return less than 60. Treat 100 as the ceiling.
Explain the adjustments you applied in one or two sentences."""

CONFIDENCE_PROMPT = """## Message
{message}

## Category
{category}"""

CONFIDENCE_SCHEMA = {
    "type": "object",
    "properties": {
        "confidence": {
            "type": "number",
            "description": "Confidence score from 60 to 100",
        },
        "reasoning": {
            "type": "string",
            "description": "Short explanation of the score adjustments",
        },
    },
    "required": ["confidence", "reasoning"],
    "additionalProperties": False,
}

RESPONSE_SYSTEM_PROMPT = """You write replies to customer messages for a consumer brand's support and social team.

Write a short, friendly, on-brand reply to the message, then pick the channel to send it through:

- **Email**: The reply is formal, needs documentation, or involves business, legal, or hiring details.
- **DM/Comment**: Low-friction or public interactions such as praise, quick product questions, or casual remarks.
- **CRM Ticket**: The issue needs tracking, follow-up, or escalation (complaints, order problems, refunds).

When the confidence score is below 75, keep the reply non-committal so a human can review it before it is sent."""

RESPONSE_PROMPT = """## Message
{message}

## Category
{category}

## Confidence
{confidence}"""

RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "response": {
            "type": "string",
            "description": "Suggested reply to the customer",
        },
        "action": {
            "type": "string",
            "description": "Channel the reply should be sent through",
            "enum": list(ACTIONS),
        },
    },
    "required": ["response", "action"],
    "additionalProperties": False,
}

QUICK_SYSTEM_PROMPT = """You are a message classifier. Categorize the user's message into exactly one of the following categories:

- **Love**: Expressions of affection, praise, or emotional connection to the brand or product.
- **Grievance**: Complaints, frustrations, or dissatisfaction.
- **Order Information**: Questions about shipping, tracking, invoices, or payment.
- **Product Information**: Questions about product features, durability, availability, etc.
- **Fact**: Statements of fact that need no reply.
- **Business Queries**: Partnership or B2B discussions.
- **Hiring**: Questions about open roles or applying for jobs.
- **Others**: Anything else.

Also give your confidence in the category as a percentage and a brief suggestion on how to respond."""

QUICK_SCHEMA = {
    "type": "object",
    "properties": {
        "category": {
            "type": "string",
            "description": "Category of the message",
            "enum": list(QUICK_CATEGORIES),
        },
        "confidence": {
            "type": "number",
            "description": "Confidence score of the category in percentage (0-100)",
        },
        "actionableText": {
            "type": "string",
            "description": "Brief suggestion on how to respond",
        },
    },
    "required": ["category", "confidence", "actionableText"],
    "additionalProperties": False,
}
