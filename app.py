import logging
import os

from flask import Flask, Response, jsonify, request, send_file
from pydantic import ValidationError

from ai_providers.registry import build_policy
from config import Settings
from errors import InvalidRequest, QuizError, QuizNotFound
from models import init_db
from services import quizzer
from services.documents import DocumentStore
from services.exporter import export_quiz
from services.quiz_store import QuizStore
from services.schemas import QuizRequest

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None, policy=None) -> Flask:
    settings = settings or Settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    os.makedirs(settings.runtime_dir, exist_ok=True)

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config['MAX_CONTENT_LENGTH'] = settings.max_upload_mb * 1024 * 1024

    Session = init_db(settings.database_url)
    policy = policy or build_policy(settings)
    quizzes = QuizStore(Session)
    documents = DocumentStore(Session, settings.uploads_dir)

    app.extensions['quiz_policy'] = policy
    app.extensions['quiz_store'] = quizzes
    app.extensions['document_store'] = documents

    @app.errorhandler(QuizError)
    def handle_quiz_error(e):
        if e.status_code >= 500:
            logger.error(f"{e.__class__.__name__}: {e}")
        return jsonify({"success": False, "error": str(e)}), e.status_code

    @app.errorhandler(413)
    def handle_too_large(e):
        return jsonify({"success": False, "error": f"File exceeds {settings.max_upload_mb} MB"}), 413

    @app.get('/health')
    def health():
        return {"ok": True}

    # ============== UPLOAD ==============

    @app.post('/api/upload')
    def upload():
        file = request.files.get('file')
        if not file or not file.filename:
            raise InvalidRequest("No file uploaded")
        doc = documents.save_upload(file.filename, file.read())
        return {"success": True, "id": doc.id, "filename": doc.filename, "content": doc.content}

    @app.get('/api/upload/<doc_id>')
    def get_document(doc_id):
        doc = documents.get(doc_id)
        return {"success": True, "id": doc.id, "filename": doc.filename, "content": doc.content}

    @app.get('/api/upload/file/<doc_id>')
    def get_original_file(doc_id):
        path, filename, mimetype = documents.original_file(doc_id)
        return send_file(path, mimetype=mimetype, as_attachment=True, download_name=filename)

    # ============== QUIZ ==============

    @app.post('/api/quiz/generate')
    def quiz_generate():
        body = request.get_json(silent=True) or {}
        try:
            req = QuizRequest.model_validate(body)
        except ValidationError as e:
            raise InvalidRequest(f"Invalid quiz request: {e.errors()[0]['msg']}")

        content = req.document_text
        if not (content and content.strip()) and req.document_id:
            content = documents.get(req.document_id).content
        if not (content and content.strip()):
            raise InvalidRequest("Document text is required")

        record = quizzer.generate_quiz(policy, quizzes, req, content, document_id=req.document_id)
        return {"success": True, **record.to_public()}

    @app.get('/api/quiz/status/ai')
    def ai_status():
        providers = policy.availability()
        return {"available": any(providers.values()), "providers": providers}

    def _load(quiz_id):
        record = quizzes.get(quiz_id)
        if record is None:
            raise QuizNotFound(quiz_id)
        return record

    @app.get('/api/quiz/<quiz_id>')
    def quiz_view(quiz_id):
        return {"success": True, **_load(quiz_id).to_public()}

    @app.get('/api/quiz/<quiz_id>/export')
    def quiz_export(quiz_id):
        record = _load(quiz_id)
        body, mimetype, ext = export_quiz(request.args.get('format', 'json'), record.questions, record.title)
        return Response(body, mimetype=mimetype, headers={
            "Content-Disposition": f'attachment; filename="quiz-{quiz_id}.{ext}"'
        })

    @app.post('/api/quiz/<quiz_id>/score')
    def quiz_score(quiz_id):
        record = _load(quiz_id)
        body = request.get_json(silent=True) or {}
        answers = body.get('answers')
        if not isinstance(answers, dict):
            raise InvalidRequest("answers must be an object mapping question id to option text")
        return {"success": True, "quizId": record.id, **quizzer.grade_answers(record.questions, answers)}

    @app.delete('/api/quiz/<quiz_id>')
    def quiz_delete(quiz_id):
        if not quizzes.evict(quiz_id):
            raise QuizNotFound(quiz_id)
        return {"success": True, "quizId": quiz_id}

    return app


if __name__ == '__main__':
    create_app().run(debug=True)
