"""
Unit tests for the complaint text analyzer, router and reply templates.

These exercise pure functions only and need no database.
"""
import pytest

from complaints.lexicons import CATEGORIES, SENTIMENTS, URGENCIES
from complaints.services.analysis import (
    analyze,
    category_scores,
    emotional_intensity,
    extract_keywords,
)
from complaints.services.assignment import ASSIGNMENT_RULES, assign
from complaints.services.templates import GENERIC_TEMPLATE, render_template

SAMPLES = [
    '',
    'The doctor was rude and the nurse ignored me',
    'I was overcharged on my bill!!! This is TERRIBLE',
    'EMERGENCY!!!',
    'thank you for the wonderful care, really excellent staff',
    'wheelchair ramp broken, very dangerous, extremely unsafe, completely unacceptable!!!!!',
    '   \n\t ',
    '12345 !!! ???',
]


def test_empty_input_yields_defaults():
    result = analyze('', '')
    assert result.sentiment == 'neutral'
    assert result.suggested_category == 'other'
    assert result.confidence_score == 0.3
    assert result.urgency_score == 'medium'
    assert result.emotional_intensity == 1
    assert result.keywords == ()
    assert result.similar_complaints == ()


@pytest.mark.parametrize('text', SAMPLES)
def test_result_ranges_hold_for_any_text(text):
    result = analyze(text, 'Title')
    assert 0 <= result.confidence_score <= 1
    assert 1 <= result.emotional_intensity <= 10
    assert result.sentiment in SENTIMENTS
    assert result.urgency_score in URGENCIES
    assert result.suggested_category in CATEGORIES
    assert len(result.keywords) <= 10


def test_analysis_is_deterministic():
    text = 'The bill was wrong and the staff were rude, this is unacceptable!'
    assert analyze(text, 'Billing') == analyze(text, 'Billing')
    assert analyze(text, 'Billing').as_dict() == analyze(text, 'Billing').as_dict()


def test_sentiment_accumulates_every_occurrence():
    # -3 for "terrible", +2 for each of three "thank you"
    assert analyze('terrible but thank you thank you thank you').sentiment == 'positive'


def test_sentiment_levels():
    assert analyze('terrible').sentiment == 'very_negative'
    assert analyze('the food was bad').sentiment == 'negative'
    assert analyze('the visit was okay').sentiment == 'neutral'
    assert analyze('very happy with the visit').sentiment == 'positive'


def test_category_saturation_gives_full_confidence():
    text = 'wheelchair disabled accessibility ramp elevator parking access mobility barrier'
    result = analyze(text)
    assert result.suggested_category == 'accessibility_issues'
    assert result.confidence_score == 1.0


def test_category_tie_goes_to_first_defined_label():
    # "rude" is listed under both doctor_behavior and staff_behavior
    result = analyze('rude')
    assert result.suggested_category == 'doctor_behavior'
    assert result.confidence_score == 0.09


def test_trailing_space_bonus_only_for_non_final_keyword():
    assert dict(category_scores(' the bill'))['billing_issues'] == 1.0
    assert dict(category_scores(' the bill was wrong'))['billing_issues'] == 1.5


def test_text_without_category_keywords_is_other():
    result = analyze('hello there')
    assert result.suggested_category == 'other'
    assert result.confidence_score == 0.3


def test_title_is_part_of_the_analysed_text():
    assert analyze('please help', title='Overcharged invoice').suggested_category == 'billing_issues'


def test_urgency_priority_ignores_order_and_count():
    assert analyze('suggestion suggestion feedback emergency').urgency_score == 'critical'
    assert analyze('emergency, but also a suggestion and feedback').urgency_score == 'critical'


def test_urgency_levels_and_default():
    assert analyze('I am in pain').urgency_score == 'high'
    assert analyze('just a minor suggestion').urgency_score == 'low'
    assert analyze('there is a problem').urgency_score == 'medium'
    assert analyze('hello there').urgency_score == 'medium'


def test_emotional_intensity_scoring():
    # very +1, serious +1, "!!!" +1, five "!" capped at +3
    assert analyze('This is very very serious!!!!!').emotional_intensity == 7


def test_all_caps_message_scores_caps_bonus():
    assert analyze('THE ROOM IS DIRTY').emotional_intensity == 3
    assert analyze('The ROOM is DIRTY').emotional_intensity == 1


def test_caps_bonus_without_letters():
    assert analyze('!!!').emotional_intensity == 7
    assert analyze('12345').emotional_intensity == 3
    assert emotional_intensity(' 123 ', ' 123 ') == 3


def test_blank_message_gets_no_caps_bonus():
    assert analyze('', '').emotional_intensity == 1
    assert emotional_intensity('   ', '   ') == 1


def test_emotional_intensity_is_capped():
    text = 'very extremely really absolutely completely totally urgent immediate serious critical!!!'
    assert analyze(text).emotional_intensity == 10


def test_keywords_filter_stopwords_and_keep_first_occurrence():
    result = analyze('The doctor was rude and the doctor ignored my pain')
    assert result.keywords == ('doctor', 'rude', 'ignored', 'pain')
    assert extract_keywords('their these those would should') == ()


def test_keywords_are_truncated_to_ten():
    words = ' '.join(f'word{chr(97 + i)}' for i in range(12))
    keywords = analyze(words).keywords
    assert len(keywords) == 10
    assert keywords[0] == 'worda'
    assert keywords[-1] == 'wordj'


def test_as_dict_uses_api_field_names():
    data = analyze('rude doctor').as_dict()
    assert set(data) == {
        'sentiment', 'keywords', 'suggestedCategory', 'confidenceScore',
        'emotionalIntensity', 'urgencyScore', 'similarComplaints',
    }
    assert data['similarComplaints'] == []
    assert isinstance(data['keywords'], list)


def test_assign_known_category():
    a = assign('billing_issues')
    assert a.department == 'Billing Department'
    assert a.staff_name == 'Robert Wilson'
    assert a.staff_id == 'staff_robert_wilson'
    assert a.as_dict() == {
        'staffId': 'staff_robert_wilson', 'staffName': 'Robert Wilson', 'department': 'Billing Department',
    }


def test_assign_unknown_category_falls_back_to_support():
    for category in ('nonexistent_category', 'other', ''):
        a = assign(category)
        assert a.department == 'General Support'
        assert a.staff_name == 'Support Team'
        assert a.staff_id == 'staff_support_team'


def test_assign_covers_every_category():
    assert set(ASSIGNMENT_RULES) == set(CATEGORIES) - {'other'}
    assert assign('doctor_behavior').staff_id == 'staff_dr._michael_chen'


def test_render_template_for_dedicated_category():
    text = render_template({'complaintId': 'CMP202601011234', 'patientName': 'Asha', 'category': 'billing_issues'})
    assert text.startswith('Dear Asha,')
    assert 'CMP202601011234' in text
    assert 'HealthTech Billing Department' in text


@pytest.mark.parametrize('category', ['other', 'waiting_time', 'privacy_concerns', None])
def test_render_template_falls_back_to_generic(category):
    text = render_template({'complaintId': 'CMP1', 'patientName': 'Ravi', 'category': category})
    assert text == GENERIC_TEMPLATE.replace('{patientName}', 'Ravi').replace('{complaintId}', 'CMP1')
    assert 'HealthTech Support Team' in text


def test_render_template_tolerates_missing_fields_and_braces():
    assert render_template({}).startswith('Dear ,')
    text = render_template({'patientName': '{complaintId}', 'complaintId': 'CMP9', 'category': 'doctor_behavior'})
    assert text.startswith('Dear {complaintId},')
    assert '(CMP9)' in text
