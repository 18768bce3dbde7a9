import logging
from langchain_openai import AzureChatOpenAI, ChatOpenAI
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage, AIMessage
from utils.config import Settings
from utils.prompts import chat_system_prompt, chat_error_message


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

ROLE_MESSAGES = {
    "user": HumanMessage,
    "assistant": AIMessage,
    "system": SystemMessage,
}


def build_chat_model(settings: Settings) -> BaseChatModel:
    """Create the hosted chat model selected by LLM_PROVIDER"""
    if settings.llm_provider == "azure":
        return AzureChatOpenAI(
            azure_deployment=settings.azure_openai_deployment,
            api_version=settings.openai_api_version,
            azure_endpoint=settings.azure_openai_endpoint,
            api_key=settings.azure_openai_api_key,
            temperature=settings.temperature,
        )

    return ChatOpenAI(
        model=settings.openai_model,
        api_key=settings.openai_api_key,
        temperature=settings.temperature,
    )


class Agent:

    def __init__(self, settings: Settings = None, model: BaseChatModel = None):
        if model is None:
            model = build_chat_model(settings or Settings.from_env())
        self.model = model
        self.system_prompt = chat_system_prompt

    def build_messages(self, user_query: str, conversation_history: list = None) -> list:
        messages = [SystemMessage(content=self.system_prompt)]

        for msg in conversation_history or []:
            message_cls = ROLE_MESSAGES.get(msg.get('role'))
            if message_cls is None:
                logger.warning(f"Skipping history message with unknown role: {msg.get('role')}")
                continue
            messages.append(message_cls(content=msg.get('content', '')))

        messages.append(HumanMessage(content=user_query))
        return messages

    async def llm_response(self, user_query: str, conversation_history: list = None) -> str:
        logger.info(f"Starting llm_response for query ({len(user_query)} chars)")
        logger.info(f'Conversation History: {len(conversation_history) if conversation_history else 0} messages')

        messages = self.build_messages(user_query, conversation_history)

        try:
            logger.info(f'Invoking model with {len(messages)} messages')
            response = await self.model.ainvoke(messages)
        except Exception as e:
            logger.error(f"Error with model request: {e}", exc_info=True)
            return chat_error_message

        final_response = response.content if isinstance(response.content, str) else None
        if not final_response:
            final_response = "No Response"

        logger.info(f"Final response received ({len(final_response)} chars)")
        return final_response
