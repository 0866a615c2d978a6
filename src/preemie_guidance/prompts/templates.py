"""Static prompt templates for each content kind."""

from preemie_guidance.entities import ActionKind, GenerationConfig, PromptTemplate

EXPERT_NEONATOLOGIST = """You are a neonatologist with 20 years of clinical experience \
who specialises in guiding the development of babies born prematurely.

Core expertise:
- Assessing developmental milestones against corrected age
- Personalised feeding and sleep guidance
- Home care and development-promotion plans
- Supporting catch-up growth

Communication principles:
- Always use warm, professional, easy-to-understand language
- Emphasise that every baby develops at an individual pace
- Give concrete, actionable suggestions instead of abstract theory
- Focus on corrected age rather than actual age
- Never give a medical diagnosis; encourage consulting a doctor when needed

Special attention:
- Understand the anxiety of parents of premature babies and offer reassurance
- Emphasise positive growth and avoid causing unnecessary worry"""

CARING_CONSULTANT = """You are a warm family consultant for parents of premature \
babies, with professional knowledge of child development.

Emotional support:
- Understand the anxiety of new parents, especially of premature babies
- Offer reassurance together with practical guidance
- Convey professional knowledge in an encouraging, warm tone
- Emphasise the value of parental presence

Professional ability:
- Know the characteristics of each developmental stage of premature babies
- Translate developmental data into guidance parents can act on
- Suggest exercises suited to a home environment
- Recognise situations that need professional medical attention"""


DAILY_GUIDANCE = PromptTemplate(
    name="daily_guidance",
    system_prompt=EXPERT_NEONATOLOGIST,
    user_template="""Please write today's personalised care guidance for this premature baby.

[Baby profile]
- Name: {{babyName}}
- Gestational age at birth: {{gestationalWeeks}} weeks + {{gestationalDays}} days
- Prematurity: born {{prematureWeeks}} weeks early ({{prematureSeverity}})
- Corrected age: {{correctedMonths}} months {{correctedDays}} days
- Actual age: {{actualMonths}} months {{actualDays}} days
- Developmental stage: {{ageCategory}}

[Recent care data]
Feeding:
{{feedingAnalysis}}

Sleep:
{{sleepAnalysis}}

Development:
{{developmentAnalysis}}

[Requirements]
Based on the special developmental needs of premature babies, write warm and
professional guidance that:
1. Stresses the importance of corrected age and eases parental anxiety
2. Gives specific guidance for the current developmental stage
3. Takes catch-up growth into account
4. Offers 2-3 concrete, actionable suggestions
5. Stays warm and encouraging, without medical advice or diagnosis

Reply strictly in this JSON format:
{
  "title": "A warm, personal title for today",
  "content": "100-150 words of developmental guidance",
  "actionItems": ["Actionable suggestion 1", "Actionable suggestion 2", "Actionable suggestion 3"],
  "tags": ["#tag1", "#tag2"],
  "urgencyLevel": "low"
}

Choose tags from: #gross-motor #fine-motor #cognition #social-emotional #sensory
#feeding #sleep #bonding #catch-up-growth""",
    variables=(
        "babyName",
        "gestationalWeeks",
        "gestationalDays",
        "prematureWeeks",
        "prematureSeverity",
        "correctedMonths",
        "correctedDays",
        "actualMonths",
        "actualDays",
        "ageCategory",
        "feedingAnalysis",
        "sleepAnalysis",
        "developmentAnalysis",
    ),
    generation_config=GenerationConfig(
        temperature=0.7,
        max_output_tokens=1000,
        required_behaviors=(
            "Include concrete, actionable suggestions",
            "Warm and professional language that reassures parents",
            "Guidance based on corrected age",
            "No medical diagnosis or alarming information",
        ),
    ),
)

MILESTONE_RECOMMENDATION = PromptTemplate(
    name="milestone_recommendation",
    system_prompt=CARING_CONSULTANT,
    user_template="""Suggest what this baby's next developmental focus should be.

[Baby]
- Name: {{babyName}}
- Gestational age at birth: {{gestationalWeeks}} weeks + {{gestationalDays}} days
- Prematurity: born {{prematureWeeks}} weeks early
- Corrected age: {{correctedMonths}} months {{correctedDays}} days
- Actual age: {{actualMonths}} months {{actualDays}} days

[Progress]
Milestones achieved: {{totalMilestones}}
By area:
- Motor: {{motorCount}}
- Cognitive: {{cognitiveCount}}
- Social-emotional: {{socialCount}}
- Language: {{languageCount}}

Recently achieved: {{recentMilestones}}

[Requirements]
Provide:
1. The 1-2 developmental areas to focus on next
2. 2-3 specific exercises to do at home
3. Warm encouragement that individual differences are normal

Reply in 80-120 words, warmly and professionally, avoiding diagnostic language.""",
    variables=(
        "babyName",
        "gestationalWeeks",
        "gestationalDays",
        "prematureWeeks",
        "correctedMonths",
        "correctedDays",
        "actualMonths",
        "actualDays",
        "totalMilestones",
        "motorCount",
        "cognitiveCount",
        "socialCount",
        "languageCount",
        "recentMilestones",
    ),
    generation_config=GenerationConfig(
        temperature=0.7,
        max_output_tokens=500,
        required_behaviors=(
            "Focus on 1-2 developmental areas",
            "Give specific home exercises",
            "Stress that individual differences are normal",
            "Warm, encouraging tone",
        ),
    ),
)

GROWTH_INSIGHTS = PromptTemplate(
    name="growth_insights",
    system_prompt=EXPERT_NEONATOLOGIST,
    user_template="""Analyse this baby's growth data and share professional insights.

[Baby]
- Corrected age: {{correctedMonths}} months {{correctedDays}} days
- Born {{prematureWeeks}} weeks early

[Data summary]
- Recent feeding records: {{feedingCount}}
- Recent sleep records: {{sleepCount}}
- Milestones achieved: {{milestonesCount}}

[Patterns]
{{dataAnalysis}}

Reply in JSON:
{
  "insights": ["Insight based on the data 1", "Insight 2", "Insight 3"],
  "recommendations": ["Actionable recommendation 1", "Recommendation 2", "Recommendation 3"],
  "concerns": ["Calm point worth watching 1", "Point 2"]
}

Keep each item to 30-50 words; points to watch must be calm and objective.""",
    variables=(
        "correctedMonths",
        "correctedDays",
        "prematureWeeks",
        "feedingCount",
        "sleepCount",
        "milestonesCount",
        "dataAnalysis",
    ),
    generation_config=GenerationConfig(
        temperature=0.6,
        max_output_tokens=800,
        required_behaviors=(
            "Analyse data patterns professionally",
            "Give actionable recommendations",
            "Calm and objective, never alarming",
            "Concise",
        ),
    ),
)

KNOWLEDGE_CARDS = PromptTemplate(
    name="knowledge_cards",
    system_prompt=CARING_CONSULTANT,
    user_template="""Create {{cardCount}} knowledge cards for a premature baby in the \
{{ageCategory}} stage, covering development, care essentials and common questions.

Corrected age: {{correctedMonths}} months {{correctedDays}} days
Born {{prematureWeeks}} weeks early

Reply in JSON:
{
  "cards": [
    {
      "title": "Practical, engaging card title",
      "content": "80-120 words of practical content for premature babies",
      "category": "category name",
      "relevanceScore": 0.9,
      "tags": ["#tag1", "#tag2"]
    }
  ]
}

Categories: development, feeding, sleep, health care, bonding, emotional support""",
    variables=("ageCategory", "cardCount", "correctedMonths", "correctedDays", "prematureWeeks"),
    generation_config=GenerationConfig(
        temperature=0.8,
        max_output_tokens=1200,
        required_behaviors=(
            "Address the special needs of premature babies",
            "Practical and actionable",
            "Warm and professional language",
            "Avoid overly medical wording",
        ),
    ),
)

TEMPLATES: dict[ActionKind, PromptTemplate] = {
    ActionKind.DAILY_GUIDANCE: DAILY_GUIDANCE,
    ActionKind.MILESTONE: MILESTONE_RECOMMENDATION,
    ActionKind.INSIGHTS: GROWTH_INSIGHTS,
    ActionKind.KNOWLEDGE_CARDS: KNOWLEDGE_CARDS,
}
