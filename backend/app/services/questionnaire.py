from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


RESPONSE_SCALE = {
    "Strongly Disagree": 1,
    "Disagree": 2,
    "Neutral": 3,
    "Agree": 4,
    "Strongly Agree": 5,
}
SCALE_VALUES = frozenset(RESPONSE_SCALE.values())
SCALE_MIN = min(SCALE_VALUES)
SCALE_MAX = max(SCALE_VALUES)

INTELLIGENCE_LAYER = 1
PERSONALITY_LAYER = 2
REFLECTION_LAYER = 6


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    category: str


@dataclass(frozen=True)
class QuestionLayer:
    number: int
    title: str
    description: str
    questions: tuple[Question, ...] = field(default_factory=tuple)
    is_open_ended: bool = False

    @property
    def question_ids(self) -> set[str]:
        return {question.id for question in self.questions}


def _q(question_id: str, text: str, category: str) -> Question:
    return Question(id=question_id, text=text, category=category)


LAYERS: tuple[QuestionLayer, ...] = (
    QuestionLayer(
        number=1,
        title="Multiple Intelligences Assessment",
        description="Discover your unique cognitive strengths across different intelligence types",
        questions=(
            _q("linguistic_1", "I enjoy writing essays, stories, or journal entries for fun.", "Linguistic Intelligence"),
            _q("linguistic_2", "I find it easy to explain complex topics in simple terms.", "Linguistic Intelligence"),
            _q("logical_1", "I enjoy solving logical puzzles, riddles, or brain teasers.", "Logical-Mathematical Intelligence"),
            _q("logical_2", "I analyze data, statistics, or numerical trends to make decisions.", "Logical-Mathematical Intelligence"),
            _q("interpersonal_1", "I enjoy working in teams and collaborating with peers on projects.", "Interpersonal Intelligence"),
            _q("interpersonal_2", "I am good at resolving conflicts between friends or classmates.", "Interpersonal Intelligence"),
            _q("intrapersonal_1", "I regularly reflect on my personal strengths and weaknesses.", "Intrapersonal Intelligence"),
            _q("intrapersonal_2", "I set clear personal and academic goals for myself.", "Intrapersonal Intelligence"),
            _q("naturalistic_1", "I enjoy studying environmental topics like sustainability, ecology, or agriculture.", "Naturalistic Intelligence"),
            _q("naturalistic_2", "I like spending time in nature and observing patterns in the environment.", "Naturalistic Intelligence"),
            _q("kinesthetic_1", "I enjoy physical activities like sports, dance, or acting.", "Bodily-Kinesthetic Intelligence"),
            _q("kinesthetic_2", "I learn better by doing rather than just reading or listening.", "Bodily-Kinesthetic Intelligence"),
            _q("musical_1", "I can identify or reproduce musical patterns easily.", "Musical Intelligence"),
            _q("musical_2", "I enjoy listening to or creating music.", "Musical Intelligence"),
            _q("spatial_1", "I enjoy drawing, painting, or visual designing.", "Visual-Spatial Intelligence"),
            _q("spatial_2", "I can visualize objects from different angles in my mind.", "Visual-Spatial Intelligence"),
        ),
    ),
    QuestionLayer(
        number=2,
        title="Personality Traits & Cognitive Styles",
        description="Understand your personality patterns and cognitive preferences",
        questions=(
            _q("mbti_1", "I get energized by spending time alone (I) vs with others (E).", "MBTI Preferences"),
            _q("mbti_2", "I prefer focusing on facts (S) vs big picture ideas (N).", "MBTI Preferences"),
            _q("openness_1", "I enjoy trying new and different activities.", "Big Five - Openness"),
            _q("openness_2", "I am imaginative and full of ideas.", "Big Five - Openness"),
            _q("conscientiousness_1", "I like to keep things organized and tidy.", "Big Five - Conscientiousness"),
            _q("conscientiousness_2", "I follow through with tasks and responsibilities.", "Big Five - Conscientiousness"),
            _q("extraversion_1", "I feel comfortable in social situations.", "Big Five - Extraversion"),
            _q("extraversion_2", "I enjoy being the center of attention.", "Big Five - Extraversion"),
            _q("agreeableness_1", "I am considerate and kind to almost everyone.", "Big Five - Agreeableness"),
            _q("agreeableness_2", "I try to see things from others' perspectives.", "Big Five - Agreeableness"),
            _q("autonomy_1", "I feel free to choose how to approach my work or study.", "Self-Determination - Autonomy"),
            _q("competence_1", "I feel capable and effective in what I do.", "Self-Determination - Competence"),
            _q("relatedness_1", "I feel connected and close to people around me.", "Self-Determination - Relatedness"),
        ),
    ),
    QuestionLayer(
        number=3,
        title="Aptitudes & Skills Assessment",
        description="Evaluate your natural abilities and developed skills",
        questions=(
            _q("numerical_1", "I am comfortable working with numbers and data.", "Numerical Aptitude"),
            _q("numerical_2", "I can solve arithmetic and algebraic problems easily.", "Numerical Aptitude"),
            _q("verbal_1", "I understand and use new vocabulary quickly.", "Verbal Aptitude"),
            _q("verbal_2", "I can comprehend and analyze written passages.", "Verbal Aptitude"),
            _q("abstract_1", "I can spot logical patterns in unfamiliar problems.", "Abstract Reasoning"),
            _q("abstract_2", "I can mentally manipulate shapes and figures.", "Abstract Reasoning"),
            _q("technical_1", "I have experience with software/tools relevant to my field.", "Technical Skills"),
            _q("technical_2", "I can troubleshoot or learn new technical skills quickly.", "Technical Skills"),
            _q("creative_1", "I can generate original ideas and solutions.", "Creative/Design Skills"),
            _q("creative_2", "I am skilled at sketching, designing, or multimedia work.", "Creative/Design Skills"),
            _q("communication_1", "I express my ideas clearly in speaking or writing.", "Communication Skills"),
            _q("communication_2", "I adapt my message to suit the audience.", "Communication Skills"),
        ),
    ),
    QuestionLayer(
        number=4,
        title="Background & Environmental Factors",
        description="Consider your educational background and environmental influences",
        questions=(
            _q("education_1", "I have access to quality academic resources (books, teachers, labs).", "Educational Background"),
            _q("education_2", "I attend or have attended a school/college with strong academic performance.", "Educational Background"),
            _q("socioeconomic_1", "I have access to stable internet, computer, and other learning tools.", "Socioeconomic Factors"),
            _q("socioeconomic_2", "My family can support me in pursuing higher education or specialized training.", "Socioeconomic Factors"),
            _q("exposure_1", "I've interacted with professionals from various career paths.", "Career Exposure"),
            _q("exposure_2", "I have participated in internships, shadowing, or volunteering roles.", "Career Exposure"),
        ),
    ),
    QuestionLayer(
        number=5,
        title="Interests, Values & Career Awareness",
        description="Explore your passions, values, and career awareness",
        questions=(
            _q("interests_1", "I have clear hobbies or subjects that I love spending time on.", "Interests and Passions"),
            _q("interests_2", "I often find myself researching or learning about certain topics outside class.", "Interests and Passions"),
            _q("trends_1", "I am aware of new and emerging fields in the job market.", "Career Trends Awareness"),
            _q("trends_2", "I regularly explore how careers are evolving with technology and globalization.", "Career Trends Awareness"),
            _q("values_1", "I have written down or thought deeply about my career goals.", "Personal Goals and Values"),
            _q("values_2", "My career decisions are guided by my personal values (e.g., helping others, creativity, stability).", "Personal Goals and Values"),
        ),
    ),
    QuestionLayer(
        number=6,
        title="Self-Reflection & Future Planning",
        description="Synthesize your insights and plan your career journey",
        questions=(
            _q("synthesis_1", "Based on my intelligence strengths, the types of activities I naturally enjoy are:", "Self-Synthesis"),
            _q("synthesis_2", "Based on my personality, I thrive in environments that are:", "Self-Synthesis"),
            _q("synthesis_3", "The industries and roles that excite me most are:", "Self-Synthesis"),
            _q("passion_1", "My top 3 career interest areas are:", "Career Interests"),
            _q("confidence_1", "What's holding you back from pursuing your top career option(s)?", "Confidence Check"),
            _q("confidence_2", "What fears or doubts do you still have about your career path?", "Confidence Check"),
            _q("action_1", "What are 3 things you can do in the next 30 days to explore your top choice(s)?", "Action Planning"),
            _q("action_2", "What specific skills or knowledge gaps do you need to address?", "Action Planning"),
        ),
        is_open_ended=True,
    ),
)

LAYER_COUNT = len(LAYERS)


def list_layers() -> list[QuestionLayer]:
    return list(LAYERS)


def get_layer(number: int) -> QuestionLayer | None:
    if 1 <= number <= LAYER_COUNT:
        return LAYERS[number - 1]
    return None


def layer_key(number: int) -> str:
    return f"layer_{number}"


def is_scale_value(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value in SCALE_VALUES


def invalid_scaled_answers(layer: QuestionLayer, responses: Mapping[str, Any]) -> list[str]:
    """Question ids whose answer is not a point on the response scale.

    Open-ended layers take free text, so nothing is rejected there.
    """
    if layer.is_open_ended:
        return []
    return sorted(question_id for question_id, value in responses.items() if not is_scale_value(value))
