"""
Short prefixed IDs for forms, questions, options and submissions.
"""

import pytest

from formquota.utils.id_generator import (
    generate_id,
    generate_form_id,
    generate_option_id,
    get_id_type,
    validate_id,
)
from formquota.models.domain.form import Form, Option, Question, Submission


def test_generated_ids_are_valid():
    form_id = generate_form_id()
    assert form_id.startswith("fm_")
    assert len(form_id) == 11
    assert validate_id(form_id)
    assert validate_id(form_id, 'form')
    assert not validate_id(form_id, 'option')


def test_id_type_roundtrip():
    assert get_id_type(generate_option_id()) == 'option'
    assert get_id_type(generate_id('submission')) == 'submission'
    assert get_id_type("nonsense") is None


def test_unknown_entity_type():
    with pytest.raises(ValueError):
        generate_id('page')


def test_models_assign_ids_when_missing():
    option = Option(id="", question_id="qs_00000000", text="A")
    submission = Submission(id="", form_id="fm_1", question_id="qs_1", option_id=option.id)
    assert validate_id(option.id, 'option')
    assert validate_id(submission.id, 'submission')


def test_form_ids_propagate_to_children():
    option = Option(id="", question_id="", text="A")
    question = Question(id="", form_id="", text="Day 1", options=[option])
    form = Form(id="", title="Signup", questions=[question])
    assert validate_id(form.id, 'form')
    assert validate_id(question.id, 'question')
    assert question.form_id == form.id
    assert option.question_id == question.id


def test_models_keep_valid_ids():
    option = Option(id="op_abcdefgh", question_id="qs_00000000", text="A")
    assert option.id == "op_abcdefgh"
