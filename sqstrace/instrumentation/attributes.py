"""Semantic convention keys and values used on SQS consumer spans."""

FAAS_TRIGGER = "faas.trigger"
MESSAGING_SYSTEM = "messaging.system"
MESSAGING_OPERATION_TYPE = "messaging.operation.type"
MESSAGING_MESSAGE_ID = "messaging.message.id"
MESSAGING_DESTINATION_NAME = "messaging.destination.name"
MESSAGING_BATCH_MESSAGE_COUNT = "messaging.batch.message_count"

FAAS_TRIGGER_PUBSUB = "pubsub"
MESSAGING_SYSTEM_AWS_SQS = "aws_sqs"
# Value of the "deliver" operation type since semantic conventions 1.26
MESSAGING_OPERATION_PROCESS = "process"

BATCH_SPAN_NAME = "multiple_sources process"
MESSAGE_SPAN_SUFFIX = "process"

COMMON_ATTRIBUTES = {
    FAAS_TRIGGER: FAAS_TRIGGER_PUBSUB,
    MESSAGING_OPERATION_TYPE: MESSAGING_OPERATION_PROCESS,
    MESSAGING_SYSTEM: MESSAGING_SYSTEM_AWS_SQS,
}
