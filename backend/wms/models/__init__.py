from .base import EntitySchema, RegisterSchema, Field, StatusEnum, FrequencyEnum, GenderEnum
from .Worker import Worker
from .Department import Department
from .Trade import Trade
from .Training import Training
from .TradeRegister import TradeRegister
from .TrainingRegister import TrainingRegister

ENTITIES = {
    schema.endpoint: schema
    for schema in (Worker, Department, Trade, Training, TradeRegister, TrainingRegister)
}
