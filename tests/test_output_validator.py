from quizgen.core.constants import Difficulty
from quizgen.schemas import Question, ValidationFailure
from quizgen.services.output_validator import validate_question_batch

from conftest import make_question, make_questions


def test_well_formed_batch_is_returned_unchanged(questions):
    result = validate_question_batch({"questions": questions}, expected_count=10)

    assert isinstance(result, list)
    assert [q.to_wire() for q in result] == questions


def test_bare_array_is_accepted():
    result = validate_question_batch(make_questions(3))

    assert [q.id for q in result] == [1, 2, 3]


def test_ids_are_reassigned_in_order():
    records = [make_question(1, id=7), make_question(2, id=7), make_question(3)]
    del records[2]["id"]

    result = validate_question_batch({"questions": records})

    assert [q.id for q in result] == [1, 2, 3]


def test_missing_difficulty_is_a_schema_violation(questions):
    del questions[3]["difficulty"]

    result = validate_question_batch({"questions": questions})

    assert isinstance(result, ValidationFailure)
    assert [issue.field for issue in result.issues] == ["questions[3].difficulty"]


def test_unknown_difficulty_is_rejected():
    result = validate_question_batch({"questions": [make_question(1, difficulty="expert")]})

    assert isinstance(result, ValidationFailure)
    assert result.issues[0].field == "questions[0].difficulty"


def test_difficulty_case_is_normalized():
    result = validate_question_batch({"questions": [make_question(1, difficulty=" Hard ")]})

    assert result[0].difficulty is Difficulty.HARD
    assert result[0].to_wire()["difficulty"] == "hard"


def test_every_invalid_record_is_reported():
    records = [
        make_question(1, question=""),
        make_question(2, category=None),
        "not an object",
        make_question(4, options="A, B"),
    ]

    result = validate_question_batch({"questions": records})

    fields = [issue.field for issue in result.issues]
    assert fields == [
        "questions[0].question",
        "questions[1].category",
        "questions[2]",
        "questions[3].options",
    ]


def test_wrong_types_are_rejected():
    result = validate_question_batch({"questions": [make_question(1, question=12, correctAnswer=3)]})

    fields = {issue.field for issue in result.issues}
    assert fields == {"questions[0].question", "questions[0].correctAnswer"}


def test_question_with_duplicate_options_is_dropped():
    records = make_questions(3)
    records[1]["options"] = ["Yes", "No", "Yes "]

    result = validate_question_batch({"questions": records})

    assert [q.question for q in result] == ["Question number 1?", "Question number 3?"]
    assert [q.id for q in result] == [1, 2]


def test_open_response_question_omits_options():
    record = make_question(1, options=None, correctAnswer=None)

    result = validate_question_batch({"questions": [record]})

    wire = result[0].to_wire()
    assert "options" not in wire
    assert "correctAnswer" not in wire


def test_unknown_keys_are_dropped():
    result = validate_question_batch({"questions": [make_question(1, explanation="because")]})

    assert "explanation" not in result[0].to_wire()


def test_correct_answer_outside_options_is_tolerated(caplog):
    record = make_question(1, correctAnswer="None of these")

    result = validate_question_batch({"questions": [record]})

    assert result[0].correctAnswer == "None of these"
    assert "correctAnswer is not one of its options" in caplog.text


def test_count_mismatch_is_tolerated(caplog):
    result = validate_question_batch({"questions": make_questions(4)}, expected_count=10)

    assert len(result) == 4
    assert "Requested 10 questions, model produced 4" in caplog.text


def test_empty_batch_is_a_violation():
    result = validate_question_batch({"questions": []})

    assert isinstance(result, ValidationFailure)
    assert result.issues[0].field == "questions"


def test_batch_emptied_by_dropping_is_a_violation():
    record = make_question(1, options=["A", "A"])

    result = validate_question_batch({"questions": [record]})

    assert isinstance(result, ValidationFailure)


def test_missing_questions_key_is_a_violation():
    result = validate_question_batch({"items": make_questions(2)})

    assert result.issues[0].field == "questions"
    assert result.issues[0].reason == "Field required"


def test_non_list_questions_is_a_violation():
    result = validate_question_batch({"questions": {"id": 1}})

    assert result.issues[0].field == "questions"


def test_scalar_root_is_a_violation():
    result = validate_question_batch("ten questions")

    assert result.issues[0].field == "body"


def test_validated_items_are_questions(questions):
    result = validate_question_batch({"questions": questions})

    assert all(isinstance(q, Question) for q in result)
    assert {q.difficulty.value for q in result} <= {"easy", "medium", "hard"}


def test_correct_answer_is_trimmed_before_option_check(caplog):
    record = make_question(1, options=["Paris", "Rome"], correctAnswer=" Paris ")

    result = validate_question_batch({"questions": [record]})

    assert result[0].correctAnswer == "Paris"
    assert "not one of its options" not in caplog.text
