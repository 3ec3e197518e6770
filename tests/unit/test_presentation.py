# =============================================================================
# TESTES - Question Presenter
# =============================================================================
# Testes unitarios para embaralhamento das alternativas exibidas
# =============================================================================

import random


class TestPresentQuestion:
    """Testes para remapeamento da resposta correta."""

    def test_correct_option_follows_shuffle(self, make_question):
        """options[correct_answer] e o mesmo texto antes e depois."""
        from practice.engine.presentation import QuestionPresenter

        question = make_question("abc", options=["A", "B", "C"], correct_answer=1)

        for seed in range(20):
            presented = QuestionPresenter(random.Random(seed)).present(question)
            assert presented.options[presented.correct_answer] == "B"
            assert sorted(presented.options) == ["A", "B", "C"]

    def test_original_question_untouched(self, sample_question):
        """Verifica que a questao do banco nao muda."""
        from practice.engine.presentation import QuestionPresenter

        QuestionPresenter(random.Random(1)).present(sample_question)

        assert sample_question.options == ["A", "B", "C", "D", "E"]
        assert sample_question.correct_answer == 2

    def test_get_original_index(self, sample_question):
        """Indice exibido volta para o indice canonico."""
        from practice.engine.presentation import QuestionPresenter

        presented = QuestionPresenter(random.Random(4)).present(sample_question)

        for presented_index, option in enumerate(presented.options):
            original = presented.get_original_index(presented_index)
            assert sample_question.options[original] == option

        assert presented.get_original_index(presented.correct_answer) == 2

    def test_presented_keeps_identity_fields(self, sample_question):
        """Verifica id, texto e explicacao preservados."""
        from practice.engine.presentation import QuestionPresenter

        presented = QuestionPresenter(random.Random(9)).present(sample_question)

        assert presented.id == sample_question.id
        assert presented.question.text == sample_question.text
        assert presented.question.explanation == sample_question.explanation


class TestPresenterMemoization:
    """Testes para estabilidade da ordem exibida."""

    def test_same_question_same_presentation(self, sample_question):
        """Chamadas repetidas nao reembaralham."""
        from practice.engine.presentation import QuestionPresenter

        presenter = QuestionPresenter(random.Random(3))
        first = presenter.present(sample_question)

        for _ in range(5):
            assert presenter.present(sample_question) is first

    def test_different_question_reshuffles(self, sample_question, make_question):
        """Nova identidade gera nova apresentacao."""
        from practice.engine.presentation import QuestionPresenter

        presenter = QuestionPresenter(random.Random(3))
        first = presenter.present(sample_question)
        other = presenter.present(make_question("q-2"))

        assert other is not first
        assert other.id == "q-2"

    def test_reset_discards_cache(self, sample_question):
        """Verifica que reset forca novo embaralhamento."""
        from practice.engine.presentation import QuestionPresenter

        presenter = QuestionPresenter(random.Random(3))
        first = presenter.present(sample_question)
        presenter.reset()

        assert presenter.present(sample_question) is not first
