from upload_worker.core.config import settings
from upload_worker.services.upload_request_processor import UploadRequestProcessor
from upload_worker.utils.external_storage import MinioImageUploader
from upload_worker.utils.logger import configure_logging, get_logger
from upload_worker.utils.rabbitmq_client import RabbitMQWorker


def main():
    configure_logging(settings.log_level)
    logger = get_logger("upload_worker.upload_tasks")

    uploader = MinioImageUploader()
    worker = RabbitMQWorker(settings.messaging.upload_request_queue)
    sender = worker.response_sender(settings.messaging.upload_response_queue)
    processor = UploadRequestProcessor(uploader, sender)
    worker.consume(processor.on_message)

    try:
        worker.start()
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt received; shutting down")
    finally:
        worker.stop()


if __name__ == "__main__":
    main()
