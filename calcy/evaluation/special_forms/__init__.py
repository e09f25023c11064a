"""Registry of evaluation rules for the calcy evaluator.

Maps AST shapes to handler functions. Special forms are exact-head rules;
atoms and ordinary application are rules too, so the evaluator consults this
single table for every node. New special forms are added here and nowhere
else; their head symbols automatically become reserved keywords.
"""

from calcy.evaluation.dispatcher import RuleDispatcher
from calcy.evaluation.special_forms.atom_forms import number_form, symbol_form
from calcy.evaluation.special_forms.define_form import define_form
from calcy.evaluation.special_forms.lambda_form import function_form, call_by_name_form
from calcy.evaluation.special_forms.if_form import if_form
from calcy.evaluation.special_forms.quote_forms import quote_form, eval_form
from calcy.evaluation.special_forms.lazy_form import lazy_form
from calcy.evaluation.special_forms.application_form import application_form

RULES = [
    (":number", number_form),
    (":symbol", symbol_form),
    ("(define name:symbol value:any)", define_form),
    ("(function params:list<symbol> body:any)", function_form),
    ("(lambda params:list<symbol> body:any)", function_form),
    ("(callByName params:list<symbol> body:any)", call_by_name_form),
    ("(if condition:any then:any else:any)", if_form),
    ("(quote expr:any)", quote_form),
    ("(eval expr:any)", eval_form),
    ("(lazy expr:any)", lazy_form),
    ("(:any ...)", application_form),
]

DISPATCHER = RuleDispatcher(RULES)
