import json
import logging

from django.conf import settings
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .automaton import InvalidModelError
from .examples import (
    AUTOMATON_EXAMPLES,
    get_example_by_id,
    get_examples_by_category,
    get_examples_by_difficulty,
)
from .fsa_simulation import SimulationEngine
from .serialization import (
    batch_to_document,
    model_from_document,
    model_to_document,
    trace_to_document,
    validation_to_document,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_INPUT_LENGTH = 10000


def _max_input_length():
    return getattr(settings, 'FSA_ENGINE_MAX_INPUT_LENGTH', DEFAULT_MAX_INPUT_LENGTH)


def _example_to_document(example):
    return {
        'id': example.id,
        'name': example.name,
        'description': example.description,
        'category': example.category.value,
        'difficulty': example.difficulty,
        'automaton': model_to_document(example.automaton),
    }


@csrf_exempt
@require_POST
def validate_automaton(request):
    """
    Django view to run structural validation on an automaton.

    Expects a POST request with a JSON body containing:
    - automaton: The automaton document

    Returns a JSON response with 'valid' and the list of diagnostics.
    """
    try:
        data = json.loads(request.body)
        if not isinstance(data, dict):
            return JsonResponse({'error': 'Request body must be a JSON object'}, status=400)

        document = data.get('automaton')

        if not document:
            return JsonResponse({'error': 'Missing automaton definition'}, status=400)

        engine = SimulationEngine(model_from_document(document))
        return JsonResponse(validation_to_document(engine.validate()))

    except (InvalidModelError, ValueError) as e:
        logger.warning('Rejected validation request: %s', e)
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception('Validation request failed')
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def simulate_automaton(request):
    """
    Django view to simulate an automaton on an input string.

    Expects a POST request with a JSON body containing:
    - automaton: The automaton document
    - input: The input string to simulate

    The run happens even if validation reports errors; the diagnostics are
    returned alongside the trace so the client can flag them.
    """
    try:
        data = json.loads(request.body)
        if not isinstance(data, dict):
            return JsonResponse({'error': 'Request body must be a JSON object'}, status=400)

        document = data.get('automaton')
        input_string = data.get('input', '')

        if not document:
            return JsonResponse({'error': 'Missing automaton definition'}, status=400)

        if not isinstance(input_string, str):
            return JsonResponse({'error': 'input must be a string'}, status=400)

        max_length = _max_input_length()
        if len(input_string) > max_length:
            return JsonResponse(
                {'error': f'Input is longer than the maximum of {max_length} symbols'},
                status=400,
            )

        engine = SimulationEngine(model_from_document(document))
        validation = engine.validate()
        trace, accepted = engine.run(input_string)

        response = {
            'accepted': accepted,
            'type': engine.model.kind.value,
            'trace': trace_to_document(trace),
        }
        response.update(validation_to_document(validation))
        return JsonResponse(response)

    except (InvalidModelError, ValueError) as e:
        logger.warning('Rejected simulation request: %s', e)
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception('Simulation request failed')
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def run_test_inputs(request):
    """
    Django view to run a stored list of test inputs against an automaton.

    Expects a POST request with a JSON body containing:
    - automaton: The automaton document
    - inputs: List of input strings

    Returns a JSON response with a verdict per distinct input, the accepted,
    rejected and error counts, and the validation diagnostics.
    """
    try:
        data = json.loads(request.body)
        if not isinstance(data, dict):
            return JsonResponse({'error': 'Request body must be a JSON object'}, status=400)

        document = data.get('automaton')
        inputs = data.get('inputs', [])

        if not document:
            return JsonResponse({'error': 'Missing automaton definition'}, status=400)

        if not isinstance(inputs, list) or not all(isinstance(s, str) for s in inputs):
            return JsonResponse({'error': 'inputs must be a list of strings'}, status=400)

        max_length = _max_input_length()
        if any(len(s) > max_length for s in inputs):
            return JsonResponse(
                {'error': f'Input is longer than the maximum of {max_length} symbols'},
                status=400,
            )

        engine = SimulationEngine(model_from_document(document))
        validation = engine.validate()
        batch = engine.run_all(inputs)

        response = batch_to_document(batch)
        response.update(validation_to_document(validation))
        return JsonResponse(response)

    except (InvalidModelError, ValueError) as e:
        logger.warning('Rejected test input request: %s', e)
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception('Test input request failed')
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@require_GET
def list_examples(request):
    """
    Lists the example automata, optionally filtered by the 'category'
    (DFA, NFA) and 'difficulty' query parameters.
    """
    category = request.GET.get('category')
    difficulty = request.GET.get('difficulty')

    try:
        examples = get_examples_by_category(category) if category else list(AUTOMATON_EXAMPLES)
    except ValueError:
        return JsonResponse({'error': f'Unknown category: {category}'}, status=400)

    if difficulty:
        allowed = {e.id for e in get_examples_by_difficulty(difficulty)}
        examples = [e for e in examples if e.id in allowed]

    return JsonResponse({'examples': [_example_to_document(e) for e in examples]})


@require_GET
def get_example(request, example_id):
    example = get_example_by_id(example_id)
    if example is None:
        return JsonResponse({'error': f'Unknown example: {example_id}'}, status=404)
    return JsonResponse(_example_to_document(example))
